import logging

from src.config.settings import settings
from src.turf.adapters.http_collaborators import build_http_collaborators
from src.turf.adapters.in_memory_drawing_surface import InMemoryDrawingSurface
from src.turf.adapters.in_memory_territory_store import InMemoryTerritoryStore
from src.turf.adapters.logging_notifier import LoggingNotifier
from src.turf.adapters.static_team_directory import StaticTeamDirectory
from src.turf.adapters.threaded_mutation_dispatcher import ThreadedMutationDispatcher
from src.turf.domain.gestures import ShapeClicked, ShapeCreated, ShapeDeleted, ShapeEdited
from src.turf.domain.shapes import LatLng, PolygonShape, RectangleShape
from src.turf.domain.style import ShapeStyle
from src.turf.domain.territory import Team, TerritoryPatch, TerritoryStatus
from src.turf.services.color_palette import ColorPalette
from src.turf.services.map_sync_engine import MapSynchronizationEngine

DRAW_STYLE = ShapeStyle(color="#3388ff", weight=4, opacity=0.5, fill_opacity=0.2)


def print_bindings(engine: MapSynchronizationEngine, surface: InMemoryDrawingSurface, label: str) -> None:
    print(f"--- {label} ---")
    for handle, territory_id in engine.bindings.entries():
        territory = next((t for t in engine.territories() if t.id == territory_id), None)
        layer = surface.get(handle)
        name = territory.name if territory else "(provisional)"
        team = engine.team_name(territory.team_id) if territory else "-"
        print(
            f"  {territory_id:>8} {name:<14} {team:<12} "
            f"weight={layer.style.weight} fill={layer.style.fill_opacity} dash={layer.style.dash_array}"
        )


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    print("Initializing DEV map session...")

    # 1. Infrastructure
    if settings.USE_HTTP_STORE:
        print(f"Using territory API at {settings.API_BASE_URL}")
        remote = build_http_collaborators(settings)
        store, teams = remote.store, remote.team_directory
    else:
        store = InMemoryTerritoryStore(created_by=settings.CURRENT_USER_ID)
        teams = StaticTeamDirectory([Team(1, "Ikeja Canvassers"), Team(2, "Lekki Field")])
    surface = InMemoryDrawingSurface()
    dispatcher = ThreadedMutationDispatcher(workers=settings.MUTATION_WORKERS)
    notifier = LoggingNotifier()

    # 2. Engine
    engine = MapSynchronizationEngine(
        store=store,
        surface=surface,
        dispatcher=dispatcher,
        notifier=notifier,
        team_directory=teams,
        palette=ColorPalette(settings.TERRITORY_PALETTE),
        current_user_id=settings.CURRENT_USER_ID,
    )
    engine.mount()
    dispatcher.pump_until_idle()

    # 3. Operator draws two territories
    lat, lng = settings.DEFAULT_CENTER_LAT, settings.DEFAULT_CENTER_LNG
    rectangle = RectangleShape(LatLng(lat - 0.05, lng - 0.05), LatLng(lat + 0.05, lng + 0.05))
    polygon = PolygonShape((
        LatLng(lat + 0.08, lng + 0.10),
        LatLng(lat + 0.12, lng + 0.16),
        LatLng(lat + 0.06, lng + 0.21),
        LatLng(lat + 0.02, lng + 0.14),
    ))
    for shape in (rectangle, polygon):
        handle = surface.draw(shape, DRAW_STYLE)
        engine.handle(ShapeCreated(handle, shape))
    dispatcher.pump_until_idle()
    print_bindings(engine, surface, "after drawing")

    # 4. Select, reshape and reassign the rectangle
    first_id = engine.territories()[0].id
    handle = engine.bindings.handle_for(first_id)
    engine.handle(ShapeClicked(handle))
    moved = RectangleShape(LatLng(lat - 0.06, lng - 0.04), LatLng(lat + 0.04, lng + 0.06))
    surface.reshape(handle, moved)
    engine.handle(ShapeEdited(handle, moved))
    engine.edit_details(first_id, TerritoryPatch(team_id=1, status=TerritoryStatus.INACTIVE))
    dispatcher.pump_until_idle()
    print_bindings(engine, surface, "after edit")

    # 5. Delete the polygon
    second_id = engine.territories()[1].id
    engine.handle(ShapeDeleted(engine.bindings.handle_for(second_id)))
    dispatcher.pump_until_idle()
    print_bindings(engine, surface, "after delete")

    dispatcher.stop()
    print(f"Notifications: {[n.message for n in notifier.history]}")
    print("Dev run complete.")


if __name__ == "__main__":
    main()
