"""
Application Layer

Everything that turns the dispatch core into a running UI:

- scheduler: frame schedulers (asyncio-backed and manually stepped)
- render: frame-coalescing render scheduler
- mount: composition root binding model, signal, renderer and channels
- config: application configuration and logging setup
"""

from .config import (
    ApplicationConfig, Environment, LoggingConfig, RenderConfig,
    configure_logging, make_scheduler, set_config, get_config,
    configure_from_dict, configure_from_file,
)
from .mount import Program, mount
from .render import Renderer, create_render
from .scheduler import AsyncioFrameScheduler, FrameScheduler, ManualFrameScheduler

__all__ = [
    'ApplicationConfig',
    'Environment',
    'LoggingConfig',
    'RenderConfig',
    'configure_logging',
    'make_scheduler',
    'set_config',
    'get_config',
    'configure_from_dict',
    'configure_from_file',
    'Program',
    'mount',
    'Renderer',
    'create_render',
    'AsyncioFrameScheduler',
    'FrameScheduler',
    'ManualFrameScheduler',
]
