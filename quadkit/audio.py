"""Loading sounds and keeping track of their playback state."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Union

__all__ = ["FileError", "Sound", "PlaySoundParams", "SoundState", "AudioContext"]


class FileError(Exception):
    """A sound file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class Sound:
    """Handle to a sound loaded into an AudioContext."""

    id: int


@dataclass(frozen=True)
class PlaySoundParams:
    looped: bool = False
    volume: float = 1.0


@dataclass
class SoundState:
    """The data and playback state of one loaded sound."""

    data: bytes
    playing: bool = False
    looped: bool = False
    volume: float = 1.0


class AudioContext:
    """Owns loaded sounds and hands out handles to them."""

    def __init__(self) -> None:
        self.sounds: dict[int, SoundState] = {}
        self._next_id = 0

    def _state(self, sound: Sound) -> SoundState:
        try:
            return self.sounds[sound.id]
        except KeyError:
            raise KeyError(f"unknown sound {sound.id}") from None

    def load_sound(self, path: Union[str, PathLike]) -> Sound:
        """Read a sound file and load it."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise FileError(str(path), exc.strerror or str(exc)) from exc
        return self.load_sound_from_bytes(data)

    def load_sound_from_bytes(self, data: bytes) -> Sound:
        """Load sound data and return a handle to it."""
        sound = Sound(self._next_id)
        self.sounds[sound.id] = SoundState(bytes(data))
        self._next_id += 1
        return sound

    def play_sound_once(self, sound: Sound) -> None:
        """Play the sound once at full volume."""
        self.play_sound(sound, PlaySoundParams(looped=False, volume=1.0))

    def play_sound(self, sound: Sound, params: PlaySoundParams) -> None:
        state = self._state(sound)
        state.playing = True
        state.looped = params.looped
        state.volume = params.volume

    def stop_sound(self, sound: Sound) -> None:
        self._state(sound).playing = False

    def set_sound_volume(self, sound: Sound, volume: float) -> None:
        self._state(sound).volume = volume