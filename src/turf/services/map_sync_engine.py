import logging
from functools import partial
from typing import Dict, Iterable, List, Optional, Set

from src.turf.domain.errors import GeometryDecodeError
from src.turf.domain.gestures import (
    DrawGesture,
    ShapeClicked,
    ShapeCreated,
    ShapeDeleted,
    ShapeEdited,
)
from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.notification import Notification, NotificationLevel
from src.turf.domain.territory import (
    Territory,
    TerritoryDraft,
    TerritoryPatch,
    TerritoryStatus,
)
from src.turf.interfaces.drawing_surface import DrawingSurface
from src.turf.interfaces.mutation_dispatcher import MutationDispatcher
from src.turf.interfaces.notifier import Notifier
from src.turf.interfaces.team_directory import TeamDirectory
from src.turf.interfaces.territory_store import TerritoryStore
from src.turf.interfaces.turf_id_source import TurfIdSource
from src.turf.interfaces.turf_time_source import TurfTimeSource
from src.turf.observability.sync_event_logger import SyncEventLogger
from src.turf.services.binding_table import LayerBindingTable
from src.turf.services.color_palette import ColorPalette
from src.turf.services.geometry_codec import GeoJsonGeometryCodec
from src.turf.services.style_resolver import TerritoryStyleResolver
from src.turf.services.system_time_source import SystemTurfTimeSource
from src.turf.services.team_lookup import UNASSIGNED_LABEL, UNKNOWN_TEAM_LABEL, TeamLookup
from src.turf.services.territory_mutation_queue import TerritoryMutationQueue
from src.turf.services.uuid_id_source import Uuid4IdSource

logger = logging.getLogger(__name__)


class MapSynchronizationEngine:
    """
    Keeps the drawing surface and the Territory Store in step.

    Drawing gestures become store mutations; every authoritative list
    received from the store rebuilds the rendered shapes and the binding
    table from scratch. All methods and callbacks run on the map's thread;
    store calls go through the dispatcher and never block it.

    Mutations against one territory are sent one at a time, in gesture
    order. A create response hands the shape over to the store's id at
    once, and work queued behind the create follows that id.
    """

    def __init__(
            self,
            store: TerritoryStore,
            surface: DrawingSurface,
            dispatcher: MutationDispatcher,
            notifier: Notifier,
            team_directory: Optional[TeamDirectory] = None,
            codec: Optional[GeoJsonGeometryCodec] = None,
            style_resolver: Optional[TerritoryStyleResolver] = None,
            palette: Optional[ColorPalette] = None,
            id_source: Optional[TurfIdSource] = None,
            time_source: Optional[TurfTimeSource] = None,
            current_user_id: Optional[int] = None,
            event_logger: Optional[SyncEventLogger] = None
    ):
        self.store = store
        self.surface = surface
        self.dispatcher = dispatcher
        self.notifier = notifier
        self.team_directory = team_directory
        self.team_lookup = TeamLookup() if team_directory else None
        self.codec = codec or GeoJsonGeometryCodec()
        self.style_resolver = style_resolver or TerritoryStyleResolver()
        self.palette = palette or ColorPalette()
        self.id_source = id_source or Uuid4IdSource()
        self.time_source = time_source or SystemTurfTimeSource()
        self.current_user_id = current_user_id
        self.events = event_logger or SyncEventLogger()

        self.bindings = LayerBindingTable()
        self.mutations = TerritoryMutationQueue(dispatcher)

        self._territories: Dict[str, Territory] = {}
        self._provisional: Dict[str, Territory] = {}
        self._unsynced: Set[str] = set()
        self._selected_id: Optional[str] = None
        self._mounted = False
        self._refresh_generation = 0
        self._applied_generation = 0

    # --- Lifecycle ---

    def mount(self) -> None:
        self._mounted = True
        self.refresh()
        self.refresh_teams()

    def unmount(self) -> None:
        self._mounted = False
        self.surface.clear()
        self.bindings.clear()
        self._provisional.clear()
        self._unsynced.clear()
        self._selected_id = None
        self.mutations.reset()

    @property
    def mounted(self) -> bool:
        return self._mounted

    # --- Gestures ---

    def handle(self, gesture: DrawGesture) -> None:
        if isinstance(gesture, ShapeCreated):
            self._on_created(gesture)
        elif isinstance(gesture, ShapeEdited):
            self._on_edited(gesture)
        elif isinstance(gesture, ShapeDeleted):
            self._on_deleted(gesture)
        elif isinstance(gesture, ShapeClicked):
            self.select(self.bindings.resolve(gesture.handle))
        else:
            raise TypeError(f"Unsupported gesture: {type(gesture).__name__}")

    def _on_created(self, gesture: ShapeCreated) -> None:
        if gesture.handle in self.bindings:
            logger.warning(f"Ignoring create for already bound layer {gesture.handle.id}")
            return

        feature = self.codec.to_feature(gesture.shape)
        territory = Territory(
            id=self.id_source.new_id(),
            name=f"Territory {len(self._territories) + len(self._provisional) + 1}",
            color=self.palette.pick(),
            geometry=feature,
            status=TerritoryStatus.ACTIVE,
            created_by=self.current_user_id,
            created_at=self.time_source.now(),
            provisional=True,
        )
        self._provisional[territory.id] = territory
        self.bindings.bind(gesture.handle, territory.id)
        self.surface.set_style(gesture.handle, self.style_resolver.style_for(territory, False))

        draft = TerritoryDraft(
            name=territory.name,
            geometry=feature,
            color=territory.color,
            status=territory.status,
        )
        self.events.emit("territory_create_issued", provisional_id=territory.id, color=territory.color)
        self.mutations.submit(
            territory.id,
            lambda _territory_id: self.store.create(draft),
            partial(self._create_succeeded, territory.id),
            partial(self._create_failed, territory.id),
            label="create",
        )

    def _on_edited(self, gesture: ShapeEdited) -> None:
        territory_id = self.bindings.resolve(gesture.handle)
        if territory_id is None:
            logger.debug(f"Edit on unbound layer {gesture.handle.id} ignored")
            return

        feature = self.codec.to_feature(gesture.shape)
        self._replace_local(territory_id, lambda t: t.with_geometry(feature))
        self.events.emit("territory_geometry_edited", territory_id=territory_id)
        self._submit_update(territory_id, TerritoryPatch(geometry=feature))

    def _on_deleted(self, gesture: ShapeDeleted) -> None:
        territory_id = self.bindings.unbind(gesture.handle)
        self.surface.remove_shape(gesture.handle)
        if territory_id is None:
            logger.debug(f"Delete on unbound layer {gesture.handle.id} ignored")
            return
        self._issue_delete(territory_id)

    # --- Entity-edit form and details panel ---

    def edit_details(self, territory_id: str, patch: TerritoryPatch) -> None:
        """
        Field edits from the entity form (name, description, status, team...).
        Only the given fields are sent.
        """
        if patch.is_empty():
            return
        self._replace_local(territory_id, patch.apply_to)
        self._submit_update(territory_id, patch)

    def delete_territory(self, territory_id: str) -> None:
        handle = self.bindings.handle_for(territory_id)
        if handle is not None:
            self.bindings.unbind(handle)
            self.surface.remove_shape(handle)
        self._issue_delete(territory_id)

    # --- Selection ---

    def select(self, territory_id: Optional[str]) -> None:
        previous = self._selected_id
        self._selected_id = territory_id
        for changed in {previous, territory_id}:
            if changed is not None:
                self._restyle(changed)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def selected_territory(self) -> Optional[Territory]:
        if self._selected_id is None:
            return None
        return self._lookup(self._selected_id)

    # --- Authoritative list ---

    def refresh(self) -> None:
        self._refresh_generation += 1
        generation = self._refresh_generation
        self.dispatcher.submit(
            self.store.list,
            partial(self._list_loaded, generation),
            self._list_failed,
        )

    def refresh_teams(self) -> None:
        if self.team_lookup is None:
            return
        self.dispatcher.submit(
            self.team_directory.list_teams,
            self.team_lookup.load,
            lambda e: logger.warning(f"Failed to load teams: {e}"),
        )

    def apply_territories(self, territories: Iterable[Territory]) -> None:
        """
        Rebuild: drop every drawn shape and binding, then draw and bind one
        shape per territory. Territories without a decodable geometry are
        kept in the list but not drawn.
        """
        latest = list(territories)
        self.surface.clear()
        self._territories = {t.id: t for t in latest}
        self._provisional.clear()
        self._unsynced.clear()
        if self._selected_id is not None and self._selected_id not in self._territories:
            self._selected_id = None

        bound = self.bindings.rebuild_from(latest, self._render)
        self.events.emit(
            "territory_rebuilt",
            territories=len(latest),
            rendered=bound,
            skipped=len(latest) - bound,
        )

    def territories(self) -> List[Territory]:
        return list(self._territories.values())

    def provisional_territories(self) -> List[Territory]:
        return list(self._provisional.values())

    def team_name(self, team_id: Optional[int]) -> str:
        if self.team_lookup is None:
            return UNASSIGNED_LABEL if not team_id else UNKNOWN_TEAM_LABEL
        return self.team_lookup.name_for(team_id)

    # --- Internals ---

    def _render(self, territory: Territory) -> Optional[LayerHandle]:
        if not territory.geometry:
            logger.warning(f"Territory {territory.id} has no geometry; not drawn")
            return None
        try:
            shape = self.codec.to_native_shape(territory.geometry)
        except GeometryDecodeError as e:
            logger.warning(f"Territory {territory.id} geometry not drawable: {e}")
            return None
        style = self.style_resolver.style_for(territory, territory.id == self._selected_id)
        return self.surface.add_shape(shape, style)

    def _restyle(self, territory_id: str) -> None:
        handle = self.bindings.handle_for(territory_id)
        territory = self._lookup(territory_id)
        if handle is None or territory is None:
            return
        self.surface.set_style(
            handle,
            self.style_resolver.style_for(territory, territory_id == self._selected_id),
        )

    def _lookup(self, territory_id: str) -> Optional[Territory]:
        return self._territories.get(territory_id) or self._provisional.get(territory_id)

    def _replace_local(self, territory_id: str, change) -> None:
        if territory_id in self._territories:
            self._territories[territory_id] = change(self._territories[territory_id])
        elif territory_id in self._provisional:
            self._provisional[territory_id] = change(self._provisional[territory_id])
        self._restyle(territory_id)

    def _submit_update(self, territory_id: str, patch: TerritoryPatch) -> None:
        self.mutations.submit(
            territory_id,
            lambda current_id: self.store.update(current_id, patch),
            self._update_succeeded,
            self._update_failed,
            label="update",
        )

    def _issue_delete(self, territory_id: str) -> None:
        if self._selected_id == territory_id:
            self._selected_id = None
        self._provisional.pop(territory_id, None)

        if territory_id in self._unsynced:
            # Create already failed: nothing exists on the store side.
            self._unsynced.discard(territory_id)
            return

        self.events.emit("territory_delete_issued", territory_id=territory_id)
        self.mutations.submit(
            territory_id,
            lambda current_id: self.store.delete(current_id),
            partial(self._delete_succeeded, territory_id),
            self._delete_failed,
            label="delete",
        )

    # --- Store callbacks ---

    def _create_succeeded(self, provisional_id: str, territory: Territory) -> None:
        self.mutations.resolve_alias(provisional_id, territory.id)
        local = self._provisional.pop(provisional_id, None)
        promoted = self.bindings.promote(provisional_id, territory.id)
        if local is not None or promoted:
            self._territories[territory.id] = territory
        if self._selected_id == provisional_id:
            self._selected_id = territory.id

        self.events.emit(
            "territory_created",
            provisional_id=provisional_id,
            territory_id=territory.id,
            promoted=promoted,
        )
        self._notify_success("Territory created successfully")
        self.refresh()

    def _create_failed(self, provisional_id: str, error: Exception) -> None:
        if provisional_id in self._provisional:
            self._unsynced.add(provisional_id)
        self.mutations.abandon(provisional_id)
        logger.error(f"Territory create failed for provisional {provisional_id}: {error}")
        self._notify_error("Failed to create territory")

    def _update_succeeded(self, territory: Territory) -> None:
        self.events.emit("territory_updated", territory_id=territory.id)
        self._notify_success("Territory updated successfully")
        self.refresh()

    def _update_failed(self, error: Exception) -> None:
        logger.error(f"Territory update failed: {error}")
        self._notify_error("Failed to update territory")

    def _delete_succeeded(self, territory_id: str, _result) -> None:
        self._territories.pop(self.mutations.canonical(territory_id), None)
        self.events.emit("territory_deleted", territory_id=territory_id)
        self._notify_success("Territory deleted successfully")
        self.refresh()

    def _delete_failed(self, error: Exception) -> None:
        logger.error(f"Territory delete failed: {error}")
        self._notify_error("Failed to delete territory")

    def _list_loaded(self, generation: int, territories: List[Territory]) -> None:
        if not self._mounted:
            return
        if generation <= self._applied_generation:
            logger.debug(f"Discarding stale territory list (generation {generation})")
            return
        self._applied_generation = generation
        self.apply_territories(territories)

    def _list_failed(self, error: Exception) -> None:
        logger.error(f"Territory list refresh failed: {error}")
        self._notify_error("Failed to load territories")

    def _notify_success(self, message: str) -> None:
        self.notifier.notify(Notification(NotificationLevel.SUCCESS, "Success", message))

    def _notify_error(self, message: str) -> None:
        self.notifier.notify(Notification(NotificationLevel.ERROR, "Error", message))
