"""Configuration helpers for timerkit.

Defaults live in frozen dataclasses; ``load_settings`` overlays the
``TIMERKIT_*`` environment variables on top of them.
"""
from __future__ import annotations

from dataclasses import dataclass

from .utils.env import env_bool, env_int, env_str


DEFAULT_TEMPLATE = "%label%d d, %h h, %m m, %s s, %ms ms"
DEFAULT_HR_TEMPLATE = "%label: %s s, %ms ms, %us us, %ns ns"
DEFAULT_STATE_FILE = ".timerkit.json"


@dataclass(frozen=True, slots=True)
class Settings:
    template: str = DEFAULT_TEMPLATE
    metrics: bool = False
    state_file: str = DEFAULT_STATE_FILE
    bench_repeat: int = 1


DEFAULT_SETTINGS = Settings()


def load_settings(defaults: Settings = DEFAULT_SETTINGS) -> Settings:
    return Settings(
        template=env_str("TIMERKIT_TEMPLATE", defaults.template),
        metrics=env_bool("TIMERKIT_METRICS", defaults.metrics),
        state_file=env_str("TIMERKIT_STATE", defaults.state_file),
        bench_repeat=env_int("TIMERKIT_BENCH_REPEAT", defaults.bench_repeat, minimum=1),
    )
