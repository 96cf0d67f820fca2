from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

try:
    import pygame  # type: ignore
except Exception:
    pygame = None

from config import (
    COPY_FEEDBACK_SECONDS,
    FOOTER_H,
    HEADER_H,
    ITEM_ROW_H,
    PANEL_MARGIN,
    STATIONS_FILE,
    WINDOW_H,
    WINDOW_W,
)
from game import KitchenSession, LocalProvisioner, ProvisioningError, ReadinessOracle
from game.entities import FoodItem, FoodState, StationKind, StationSnapshot
from game.readiness import shorten_address
from station_catalog import load_station_catalog

ITEM_LABELS: Dict[FoodState, str] = {
    FoodState.UNPREPARED: "Raw Pizza",
    FoodState.PREPARING: "Pizza Cooking",
    FoodState.PREPARED: "Cooked Pizza",
}

ACTION_LABELS: Dict[StationKind, str] = {
    StationKind.COOKING: "Cook",
    StationKind.ASSEMBLY: "Assemble",
}


def station_is_ready(oracle: ReadinessOracle, snapshot: StationSnapshot) -> bool:
    return oracle.is_ready(snapshot.chain_id)


def run_station_action(session: KitchenSession, kind: StationKind) -> None:
    if kind is StationKind.COOKING:
        session.start_cooking_action()
    elif kind is StationKind.ASSEMBLY:
        session.start_assembly_action()


def autoplay_step(session: KitchenSession, oracle: ReadinessOracle) -> None:
    """One round of a scripted player: assemble, load the oven, cook, serve."""
    ready = {snap.kind: station_is_ready(oracle, snap) for snap in session.get_stations()}
    if not all(ready.values()):
        return

    assembly_index = session.station_index(StationKind.ASSEMBLY)
    cooking_index = session.station_index(StationKind.COOKING)

    session.start_assembly_action()
    session.transfer(assembly_index, 0)
    session.start_cooking_action()

    cooking = session.get_stations()[cooking_index]
    for index in reversed(range(len(cooking.items))):
        if cooking.items[index].state is FoodState.PREPARED:
            session.transfer(cooking_index, index)


def run_headless(ticks: int, dt: float, stations_path: Path, show_events: bool = False) -> KitchenSession:
    session = KitchenSession(load_station_catalog(stations_path))
    provisioner = LocalProvisioner()
    for snap in session.get_stations():
        provisioner.deploy(snap.chain_id, on_ready=lambda: session.log_event("Station counter deployed"))

    for _ in range(ticks):
        provisioner.tick(dt)
        autoplay_step(session, provisioner)
        session.tick(dt)

    stations = {snap.kind: snap for snap in session.get_stations()}
    print(
        f"headless_done t={session.time:.1f} served={session.get_served_count()} "
        f"cooking={len(stations[StationKind.COOKING].items)} "
        f"assembly={len(stations[StationKind.ASSEMBLY].items)} "
        f"items={session.total_items()} in_oven={session.active_cooking}"
    )
    if show_events:
        for event in session.event_log:
            print(f"  - {event}")
    return session


class GameUI:
    def __init__(self, session: KitchenSession, oracle: Optional[LocalProvisioner] = None):
        if pygame is None:
            raise RuntimeError("pygame is required for graphical mode. Relaunch with --headless.")
        pygame.init()
        if not pygame.display.get_init():
            raise RuntimeError("Display subsystem is unavailable. Relaunch with --headless.")
        try:
            self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        except pygame.error as exc:
            raise RuntimeError(f"Could not open a window ({exc}). Relaunch with --headless.") from exc
        pygame.display.set_caption("Inter-Chop")
        self.session = session
        self.oracle = oracle or LocalProvisioner()
        self.clock = pygame.time.Clock()
        self.title_font = pygame.font.SysFont("arial", 30, bold=True)
        self.font = pygame.font.SysFont("arial", 20)
        self.small = pygame.font.SysFont("arial", 16)
        self.running = True
        self.readiness: Dict[int, Tuple[bool, Optional[str]]] = {}
        self.copied_until: Dict[int, float] = {}
        self.hotspots: List[Tuple[pygame.Rect, str, int, int]] = []

        self.palette = {
            "bg": (12, 15, 24),
            "panel": (20, 25, 38),
            "panel_border": (46, 56, 80),
            "button": (74, 126, 230),
            "button_off": (60, 66, 84),
            "deploy": (232, 102, 61),
            "item": (40, 44, 58),
            "progress_bg": (43, 49, 63),
            "progress": (255, 139, 94),
            "text": (230, 236, 248),
            "muted": (161, 177, 205),
            "score": (255, 236, 160),
        }
        self.refresh_readiness()

    # ------------------------------------------------------------------
    # Readiness collaborator
    # ------------------------------------------------------------------

    def refresh_readiness(self) -> None:
        """Notify-on-ready hook: re-query the oracle for every station."""
        self.readiness = {
            snap.chain_id: (
                self.oracle.is_ready(snap.chain_id),
                self.oracle.ready_resource_handle(snap.chain_id),
            )
            for snap in self.session.get_stations()
        }

    def deploy_station(self, index: int) -> None:
        snap = self.session.get_stations()[index]
        try:
            self.oracle.deploy(snap.chain_id, on_ready=self.refresh_readiness)
        except ProvisioningError as exc:
            self.session.log_event(f"Failed to deploy {snap.kind.value} station: {exc}")

    def copy_address(self, index: int) -> None:
        snap = self.session.get_stations()[index]
        address = self.readiness.get(snap.chain_id, (False, None))[1]
        if not address:
            return
        try:
            pygame.scrap.init()
            pygame.scrap.put_text(address)
        except (pygame.error, AttributeError):
            self.session.log_event("Clipboard unavailable")
            return
        self.copied_until[snap.chain_id] = self.session.time + COPY_FEEDBACK_SECONDS

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_click(self, pos: Tuple[int, int]) -> None:
        for rect, action, station_index, item_index in self.hotspots:
            if not rect.collidepoint(pos):
                continue
            snap = self.session.get_stations()[station_index]
            if action == "deploy":
                self.deploy_station(station_index)
            elif action == "copy":
                self.copy_address(station_index)
            elif action == "action" and station_is_ready(self.oracle, snap):
                run_station_action(self.session, snap.kind)
            elif action == "item" and station_is_ready(self.oracle, snap):
                self.session.transfer(station_index, item_index)
            return

    def handle_input(self) -> None:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                self.running = False
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                self.handle_click(ev.pos)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _button(self, rect: pygame.Rect, label: str, color: Tuple[int, int, int]) -> None:
        pygame.draw.rect(self.screen, color, rect, border_radius=8)
        text = self.font.render(label, True, self.palette["text"])
        self.screen.blit(text, text.get_rect(center=rect.center))

    def _draw_item(self, rect: pygame.Rect, item: FoodItem) -> None:
        pygame.draw.rect(self.screen, self.palette["item"], rect, border_radius=8)
        self.screen.blit(self.small.render(ITEM_LABELS[item.state], True, self.palette["text"]), (rect.x + 10, rect.y + 6))
        if item.state is FoodState.PREPARING:
            bar = pygame.Rect(rect.x + 10, rect.bottom - 14, rect.w - 20, 8)
            pygame.draw.rect(self.screen, self.palette["progress_bg"], bar, border_radius=4)
            fill = pygame.Rect(bar.x, bar.y, int(bar.w * (item.prep_progress or 0) / 100), bar.h)
            pygame.draw.rect(self.screen, self.palette["progress"], fill, border_radius=4)

    def draw_station(self, index: int, snap: StationSnapshot, area: pygame.Rect) -> None:
        pygame.draw.rect(self.screen, self.palette["panel"], area, border_radius=12)
        pygame.draw.rect(self.screen, self.palette["panel_border"], area, width=2, border_radius=12)
        x, y = area.x + 16, area.y + 14
        self.screen.blit(self.font.render(f"{snap.kind.value.upper()} STATION", True, self.palette["text"]), (x, y))
        y += 36

        is_ready, address = self.readiness.get(snap.chain_id, (False, None))
        if not is_ready:
            self.screen.blit(
                self.small.render(f"Counter not deployed on Chain {snap.chain_id}", True, self.palette["muted"]), (x, y)
            )
            deploying = self.oracle.is_deploying(snap.chain_id)
            button = pygame.Rect(x, y + 30, area.w - 32, 40)
            label = "Deploying..." if deploying else f"Deploy {snap.kind.value} Counter"
            self._button(button, label, self.palette["button_off"] if deploying else self.palette["deploy"])
            if not deploying:
                self.hotspots.append((button, "deploy", index, -1))
            return

        self.screen.blit(self.small.render(f"Chain ID: {snap.chain_id}", True, self.palette["muted"]), (x, y))
        self.screen.blit(self.small.render("Status: Deployed", True, self.palette["muted"]), (x, y + 20))
        y += 44
        if address:
            self.screen.blit(self.small.render(f"Contract: {shorten_address(address)}", True, self.palette["text"]), (x, y))
            copy_rect = pygame.Rect(area.right - 92, y - 4, 76, 26)
            copied = self.copied_until.get(snap.chain_id, -1.0) > self.session.time
            self._button(copy_rect, "Copied" if copied else "Copy", self.palette["button_off"])
            self.hotspots.append((copy_rect, "copy", index, -1))
            y += 32

        action_rect = pygame.Rect(x, y, area.w - 32, 40)
        self._button(action_rect, ACTION_LABELS[snap.kind], self.palette["button"])
        self.hotspots.append((action_rect, "action", index, -1))
        y += 52

        for item_index, item in enumerate(snap.items):
            row = pygame.Rect(x, y, area.w - 32, ITEM_ROW_H - 6)
            if row.bottom > area.bottom - 8:
                break
            self._draw_item(row, item)
            self.hotspots.append((row, "item", index, item_index))
            y += ITEM_ROW_H

    def draw(self) -> None:
        self.screen.fill(self.palette["bg"])
        self.hotspots = []
        title = self.title_font.render("Inter-Chop", True, self.palette["text"])
        self.screen.blit(title, (PANEL_MARGIN, 16))
        score = self.font.render(f"Pizzas Served: {self.session.get_served_count()}", True, self.palette["score"])
        self.screen.blit(score, (PANEL_MARGIN, 56))

        stations = self.session.get_stations()
        panel_w = (WINDOW_W - PANEL_MARGIN * (len(stations) + 1)) // max(1, len(stations))
        panel_h = WINDOW_H - HEADER_H - FOOTER_H
        for index, snap in enumerate(stations):
            area = pygame.Rect(PANEL_MARGIN + index * (panel_w + PANEL_MARGIN), HEADER_H, panel_w, panel_h)
            self.draw_station(index, snap, area)

        log_y = WINDOW_H - FOOTER_H + 12
        for event in self.session.event_log[-5:]:
            self.screen.blit(self.small.render(event, True, self.palette["muted"]), (PANEL_MARGIN, log_y))
            log_y += 20

        pygame.display.flip()

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self.handle_input()
            self.oracle.tick(dt)
            self.session.tick(dt)
            self.draw()
        pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Inter-Chop two-station pizza kitchen")
    parser.add_argument("--headless", action="store_true", help="run the kitchen without graphics")
    parser.add_argument("--ticks", type=int, default=600, help="headless ticks to run")
    parser.add_argument("--dt", type=float, default=0.1, help="headless timestep")
    parser.add_argument("--stations", type=Path, default=STATIONS_FILE, help="station layout JSON")
    parser.add_argument("--events", action="store_true", help="print the event log after a headless run")
    args = parser.parse_args()

    if args.headless:
        run_headless(args.ticks, args.dt, args.stations, args.events)
        return

    session = KitchenSession(load_station_catalog(args.stations))
    try:
        ui = GameUI(session)
    except RuntimeError as exc:
        print(f"Startup error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    ui.run()


if __name__ == "__main__":
    main()
