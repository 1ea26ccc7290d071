"""Wheel engine - the programmatic surface a renderer drives.

Flow:
    1. start_spin(): resolve the winning index, plan the rotation, enter
       SPINNING and schedule the spin timer
    2. (four_phase) spin timer: enter SETTLING and schedule the settle timer
    3. last timer: enter COMPLETE, freeze rotation at the target and invoke
       the completion callback
    4. start_spin() again from COMPLETE, or reset() back to IDLE

At most one timer is live per engine. reset() and dispose() cancel it, so
a timer can never fire into a reset or disposed wheel.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from spinwheel.animation.timeline import SpinTimeline
from spinwheel.config.settings import SpinSettings, get_settings
from spinwheel.core.errors import ValidationError
from spinwheel.core.events import Event, EventBus, EventType
from spinwheel.core.scheduler import FrameScheduler, Scheduler, TimerHandle
from spinwheel.core.state import SpinEvent, SpinEventType, SpinSession, SpinStateMachine, WheelState
from spinwheel.geometry.angles import POINTER_ANGLE, angular_distance, segment_center_angle
from spinwheel.geometry.planner import RotationPlanner, initial_alignment_rotation
from spinwheel.prizes.models import OutcomeTable, Prize
from spinwheel.prizes.rng import Mulberry32, generate_seed
from spinwheel.prizes.selector import Selection, select_outcome

logger = logging.getLogger(__name__)

SpinCompleteCallback = Callable[[int], None]


@dataclass(frozen=True)
class WheelSnapshot:
    """Read-only view of the wheel for renderers.

    Attributes:
        state: Current spin state
        rotation: Last settled rotation (degrees, cumulative)
        target_rotation: Rotation the animation is driving toward
        is_spinning: True while SPINNING or SETTLING
        target_segment_index: Winner of the current or last spin
        visual_rotation: Eased rotation for the current frame
    """
    state: WheelState
    rotation: float
    target_rotation: float
    is_spinning: bool
    target_segment_index: int | None
    visual_rotation: float


class WheelEngine:
    """Deterministic spin engine for one wheel instance.

    Args:
        segment_count: Number of segments on the wheel (>= 1)
        on_spin_complete: Called once per spin with the winning index
        initial_alignment_index: Segment shown under the pointer at rest
            before the first spin (and after every reset)
        prize_table: Optional weighted table used when start_spin() gets
            no explicit index; must have ``segment_count`` entries
        seed: Seed for the engine's own stream (full spins, overshoot,
            table-selection seeds, uniform fallback index)
        scheduler: Timer source; defaults to a FrameScheduler driven by
            update()
        settings: Spin settings; defaults to the global settings
        event_bus: Bus receiving spin notifications
    """

    def __init__(
        self,
        segment_count: int,
        on_spin_complete: SpinCompleteCallback | None = None,
        initial_alignment_index: int | None = None,
        *,
        prize_table: "OutcomeTable | Sequence[Prize] | None" = None,
        seed: int | None = None,
        scheduler: Scheduler | None = None,
        settings: SpinSettings | None = None,
        event_bus: EventBus | None = None,
    ):
        if segment_count < 1:
            raise ValidationError(f"Segment count must be >= 1, got {segment_count}")

        self.segment_count = segment_count
        self._on_spin_complete = on_spin_complete
        self._settings = settings if settings is not None else get_settings().spin
        self._scheduler: Scheduler = scheduler or FrameScheduler()
        self.events = event_bus or EventBus()

        # Engine-owned stream; each table selection gets its own seed from it
        self.seed = generate_seed() if seed is None else seed
        self._rng = Mulberry32(self.seed)
        four_phase = self._settings.is_four_phase
        self._planner = RotationPlanner(
            self._rng,
            min_full_spins=self._settings.min_full_spins,
            max_full_spins=self._settings.max_full_spins,
            min_overshoot=self._settings.min_overshoot if four_phase else 0.0,
            max_overshoot=self._settings.max_overshoot if four_phase else 0.0,
        )

        # Rest rotation used at construction and after every reset
        self._reset_rotation = 0.0
        if initial_alignment_index is not None:
            self._reset_rotation = initial_alignment_rotation(initial_alignment_index, segment_count)

        self._machine = SpinStateMachine(self._settings.phase_model, self._reset_rotation)
        self._machine.add_listener(self._on_state_changed)

        # In-flight spin
        self._timer: TimerHandle | None = None
        self._timeline: SpinTimeline | None = None

        self._prize_table: OutcomeTable | None = None
        self._last_selection: Selection | None = None
        self._disposed = False

        if prize_table is not None:
            self.set_prize_table(prize_table)

        logger.info(
            f"WheelEngine created: {segment_count} segments, "
            f"{self._settings.phase_model}, seed={self.seed}"
        )

    # Observable state
    @property
    def session(self) -> SpinSession:
        return self._machine.session

    @property
    def state(self) -> WheelState:
        return self._machine.state

    @property
    def rotation(self) -> float:
        return self._machine.session.rotation

    @property
    def target_rotation(self) -> float:
        return self._machine.session.target_rotation

    @property
    def is_spinning(self) -> bool:
        return self.state in (WheelState.SPINNING, WheelState.SETTLING)

    @property
    def reset_rotation(self) -> float:
        return self._reset_rotation

    @property
    def prize_table(self) -> OutcomeTable | None:
        return self._prize_table

    @property
    def last_selection(self) -> Selection | None:
        """Selection behind the last table-driven spin (replayable by seed)."""
        return self._last_selection

    @property
    def current_prize(self) -> Prize | None:
        """Prize of the current or last spin's winning segment."""
        index = self.session.target_segment_index
        if self._prize_table is None or index is None:
            return None
        return self._prize_table[index]

    @property
    def visual_rotation(self) -> float:
        """Rotation to draw this frame."""
        if self.is_spinning and self._timeline is not None:
            value = self._timeline.value
            if value is not None:
                return value
        return self.rotation

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> WheelSnapshot:
        session = self._machine.session
        return WheelSnapshot(
            state=session.state,
            rotation=session.rotation,
            target_rotation=session.target_rotation,
            is_spinning=self.is_spinning,
            target_segment_index=session.target_segment_index,
            visual_rotation=self.visual_rotation,
        )

    # Commands
    def start_spin(self, outcome_index: int | None = None) -> None:
        """Spin to ``outcome_index``, or to a drawn index when omitted.

        Rejected (with a warning) while a spin is already in flight.
        """
        self._check_alive()

        if not self._machine.accepts(SpinEventType.START_SPIN):
            # The machine logs the invalid transition and keeps its state
            self._machine.dispatch(SpinEvent(SpinEventType.START_SPIN))
            self._emit(EventType.SPIN_REJECTED, {"state": self.state.name})
            return

        index = self._resolve_index(outcome_index)
        start = self.rotation
        plan = self._planner.plan(start, index, self.segment_count)

        self._machine.dispatch(SpinEvent(
            SpinEventType.START_SPIN,
            target_index=index,
            target_rotation=plan.rotation_with_overshoot,
            final_rotation=plan.target_rotation,
        ))

        settings = self._settings
        if settings.is_four_phase:
            self._timeline = SpinTimeline.spin_with_settle(
                start,
                plan.rotation_with_overshoot,
                plan.target_rotation,
                settings.spin_duration_ms,
                settings.settle_duration_ms,
                spin_easing=settings.spin_easing,
                settle_easing=settings.settle_easing,
            ).play()
        else:
            self._timeline = SpinTimeline.spin(
                start, plan.target_rotation, settings.spin_duration_ms, settings.spin_easing
            ).play()

        self._timer = self._scheduler.call_later(settings.spin_duration_ms, self._on_spin_timer)

        self._emit(EventType.SPIN_STARTED, {
            "target_index": index,
            "rotation": start,
            "target_rotation": plan.target_rotation,
            "full_spins": plan.full_spins,
            "overshoot": plan.overshoot,
        })

    def reset(self) -> None:
        """Cancel any spin in flight and return to IDLE at the rest rotation."""
        self._check_alive()
        self._cancel_timer()
        self._timeline = None
        self._machine.dispatch(SpinEvent(SpinEventType.RESET, reset_rotation=self._reset_rotation))
        self._emit(EventType.WHEEL_RESET, {"rotation": self._reset_rotation})

    def set_prize_table(self, prizes: "OutcomeTable | Sequence[Prize]") -> None:
        """Swap the outcome table. A spin in flight is force-reset."""
        self._check_alive()
        table = OutcomeTable.of(prizes)
        if len(table) != self.segment_count:
            raise ValidationError(
                f"Prize table has {len(table)} entries but the wheel has "
                f"{self.segment_count} segments"
            )

        if self.is_spinning:
            logger.info("Prize table changed mid-spin, resetting wheel")
            self.reset()

        self._prize_table = table
        self._emit(EventType.PRIZES_CHANGED, {"prize_ids": [p.id for p in table]})

    def update(self, delta_ms: float) -> None:
        """Per-frame tick: advance the animation and the frame scheduler."""
        if self._disposed:
            return
        if self._timeline is not None:
            self._timeline.update(delta_ms)
        self._scheduler.tick(delta_ms)

    def dispose(self) -> None:
        """Cancel pending timers and release the wheel. Idempotent."""
        if self._disposed:
            return
        self._cancel_timer()
        self._timeline = None
        self._machine.remove_listener(self._on_state_changed)
        self._disposed = True
        logger.info("WheelEngine disposed")

    def __enter__(self) -> "WheelEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # Internals
    def _check_alive(self) -> None:
        if self._disposed:
            raise RuntimeError("WheelEngine has been disposed")

    def _resolve_index(self, outcome_index: int | None) -> int:
        if outcome_index is not None:
            if not 0 <= outcome_index < self.segment_count:
                raise ValidationError(
                    f"Outcome index {outcome_index} out of range [0, {self.segment_count - 1}]"
                )
            return outcome_index

        if self._prize_table is not None:
            selection = select_outcome(self._prize_table, self._rng.next_uint32())
            self._last_selection = selection
            return selection.index

        return self._rng.randint(0, self.segment_count - 1)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_spin_timer(self) -> None:
        self._timer = None
        if self._settings.is_four_phase:
            self._machine.dispatch(SpinEvent(SpinEventType.SPIN_COMPLETE))
            # A listener may have reset or re-spun the wheel during dispatch
            if self.state == WheelState.SETTLING:
                self._timer = self._scheduler.call_later(
                    self._settings.settle_duration_ms, self._on_settle_timer
                )
        else:
            self._finish_spin(SpinEventType.SPIN_COMPLETE)

    def _on_settle_timer(self) -> None:
        self._timer = None
        self._finish_spin(SpinEventType.SETTLE_COMPLETE)

    def _finish_spin(self, event_type: SpinEventType) -> None:
        # Listeners run inside dispatch and may start or reset a spin, so the
        # finished spin's values are read first
        session = self._machine.session
        index = session.target_segment_index
        rotation = session.target_rotation
        self._timeline = None

        if self._machine.dispatch(SpinEvent(event_type)) == session.state:
            return

        error = angular_distance(
            segment_center_angle(index, self.segment_count) + rotation, POINTER_ANGLE
        )
        if error > self._settings.landing_tolerance:
            logger.error(f"Segment {index} landed {error:.4f}° off the pointer")

        logger.info(f"Spin complete: segment {index} at rotation {rotation:.2f}")
        self._emit(EventType.SPIN_COMPLETED, {
            "target_index": index,
            "rotation": rotation,
            "landing_error": error,
        })

        if self._on_spin_complete:
            try:
                self._on_spin_complete(index)
            except Exception as e:
                logger.error(f"Error in spin complete callback: {e}")

    def _on_state_changed(self, old: WheelState, new: WheelState, session: SpinSession) -> None:
        self._emit(EventType.STATE_CHANGED, {"from": old.name, "to": new.name})

    def _emit(self, event_type: EventType, data: dict) -> None:
        self.events.emit(Event(event_type, data=data, source="wheel_engine"))
