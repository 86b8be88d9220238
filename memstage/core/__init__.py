"""
Core services: environment expansion, configuration and logging
"""

from .environment import EnvironmentResolver

__all__ = ['EnvironmentResolver']
