"""Request options, engine configuration and the command-line parser."""

from .models import EngineConfig, OutputOptions, ResizeOptions
from .parser import ConfigParser

__all__ = ['ConfigParser', 'EngineConfig', 'OutputOptions', 'ResizeOptions']
