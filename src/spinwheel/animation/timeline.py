"""Keyframe timeline that turns a spin plan into per-frame rotation values.

The state machine only knows where the wheel starts and where it must come
to rest. A SpinTimeline fills in everything in between for the renderer:
it is advanced with the same frame delta as the engine and sampled for the
visual rotation each tick. Timing is owned by the engine's scheduler, so a
timeline finishing never changes wheel state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from spinwheel.animation.easing import Easing, get_easing


class PlayState(Enum):
    """Timeline playback state."""

    STOPPED = auto()
    PLAYING = auto()
    FINISHED = auto()


@dataclass
class Keyframe:
    """A single keyframe.

    Attributes:
        time: Normalized time (0.0 to 1.0) when this keyframe occurs
        value: Rotation in degrees at this keyframe
        easing: Curve used from this keyframe to the next one
    """

    time: float
    value: float
    easing: Easing | str = Easing.LINEAR

    def __post_init__(self):
        self.time = max(0.0, min(1.0, self.time))


@dataclass
class Track:
    """Ordered keyframes for one animated property."""

    name: str
    keyframes: list[Keyframe] = field(default_factory=list)

    def add_keyframe(
        self,
        time: float,
        value: float,
        easing: Easing | str = Easing.LINEAR
    ) -> "Track":
        """Add a keyframe. Returns self for chaining."""
        self.keyframes.append(Keyframe(time, value, easing))
        self.keyframes.sort(key=lambda k: k.time)
        return self

    def get_value_at(self, t: float) -> float | None:
        """Interpolated value at normalized time ``t``."""
        if not self.keyframes:
            return None

        t = max(0.0, min(1.0, t))
        if t <= self.keyframes[0].time:
            return self.keyframes[0].value
        if t >= self.keyframes[-1].time:
            return self.keyframes[-1].value

        for prev_kf, next_kf in zip(self.keyframes, self.keyframes[1:]):
            if next_kf.time > t:
                break

        span = next_kf.time - prev_kf.time
        if span <= 0:
            return prev_kf.value

        local_t = get_easing(prev_kf.easing)((t - prev_kf.time) / span)
        return prev_kf.value + (next_kf.value - prev_kf.value) * local_t


@dataclass
class SpinTimeline:
    """Rotation timeline for one spin.

    Attributes:
        name: Timeline identifier
        duration: Total duration in milliseconds
        rotation: Track of absolute rotation values
    """

    name: str
    duration: float = 5000.0
    rotation: Track = field(default_factory=lambda: Track("rotation"))

    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _current_time: float = field(default=0.0, repr=False)

    def play(self) -> "SpinTimeline":
        """Start playback from the beginning."""
        self._current_time = 0.0
        self._state = PlayState.PLAYING
        return self

    def stop(self) -> "SpinTimeline":
        """Stop playback and rewind."""
        self._state = PlayState.STOPPED
        self._current_time = 0.0
        return self

    @property
    def state(self) -> PlayState:
        return self._state

    @property
    def progress(self) -> float:
        """Normalized progress (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0
        return self._current_time / self.duration

    @property
    def is_playing(self) -> bool:
        return self._state == PlayState.PLAYING

    def update(self, delta_ms: float) -> float | None:
        """Advance by ``delta_ms`` and return the current rotation."""
        if self._state == PlayState.PLAYING:
            self._current_time = min(self._current_time + delta_ms, self.duration)
            if self._current_time >= self.duration:
                self._state = PlayState.FINISHED
        return self.value

    @property
    def value(self) -> float | None:
        return self.rotation.get_value_at(self.progress)

    @classmethod
    def spin(
        cls,
        start: float,
        target: float,
        duration: float,
        easing: Easing | str = Easing.EASE_OUT_QUINT,
        name: str = "spin",
    ) -> "SpinTimeline":
        """Single decelerating sweep from ``start`` to ``target``."""
        timeline = cls(name=name, duration=duration)
        timeline.rotation.add_keyframe(0.0, start, easing)
        timeline.rotation.add_keyframe(1.0, target)
        return timeline

    @classmethod
    def spin_with_settle(
        cls,
        start: float,
        overshoot_target: float,
        final: float,
        spin_duration: float,
        settle_duration: float,
        spin_easing: Easing | str = Easing.EASE_OUT_CUBIC,
        settle_easing: Easing | str = Easing.EASE_IN_OUT_SINE,
        name: str = "spin_settle",
    ) -> "SpinTimeline":
        """Sweep past the target, then ease back onto it."""
        total = spin_duration + settle_duration
        timeline = cls(name=name, duration=total)
        split = spin_duration / total if total > 0 else 1.0
        timeline.rotation.add_keyframe(0.0, start, spin_easing)
        timeline.rotation.add_keyframe(split, overshoot_target, settle_easing)
        timeline.rotation.add_keyframe(1.0, final)
        return timeline
