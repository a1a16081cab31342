"""User settings for video and audio."""

from __future__ import annotations

from dataclasses import dataclass

_RESOLUTIONS = ((1280, 720), (1920, 1080), (2560, 1440))


def _clamp_volume(volume: float) -> float:
    return min(max(float(volume), 0.0), 1.0)


def resolutions() -> list[tuple[int, int]]:
    """The resolutions offered to the user, smallest first."""
    return list(_RESOLUTIONS)


@dataclass
class Settings:
    """Video and audio settings; volumes are kept between 0 and 1."""

    vsync: bool = True
    fullscreen: bool = False
    width: int = 1280
    height: int = 720
    master_volume: float = 1.0
    sound_volume: float = 1.0
    music_volume: float = 1.0

    def __post_init__(self) -> None:
        self.master_volume = _clamp_volume(self.master_volume)
        self.sound_volume = _clamp_volume(self.sound_volume)
        self.music_volume = _clamp_volume(self.music_volume)

    @property
    def resolution(self) -> tuple[int, int]:
        return self.width, self.height

    def set_resolution(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def toggle_fullscreen(self) -> bool:
        """Flip fullscreen; return the new value."""
        self.fullscreen = not self.fullscreen
        return self.fullscreen

    def toggle_vsync(self) -> bool:
        """Flip vertical sync; return the new value."""
        self.vsync = not self.vsync
        return self.vsync

    def set_master_volume(self, volume: float) -> None:
        self.master_volume = _clamp_volume(volume)

    def set_music_volume(self, volume: float) -> None:
        self.music_volume = _clamp_volume(volume)

    def set_sound_volume(self, volume: float) -> None:
        self.sound_volume = _clamp_volume(volume)