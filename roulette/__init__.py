"""
Channel Roulette

Search for a YouTube channel by name, collect its uploaded videos and
pick one of them at random for playback.
"""

__version__ = "1.0.0"
__author__ = "Channel Roulette Team"

from .config import RouletteConfig, load_config
from .resolver import Channel, ChannelResolver
from .sampler import VideoSampler
from .session import SearchSession, SearchState

__all__ = [
    "Channel",
    "ChannelResolver",
    "RouletteConfig",
    "SearchSession",
    "SearchState",
    "VideoSampler",
    "load_config",
]
