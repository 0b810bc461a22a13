"""Available tool providers"""

from .evolution import EvolutionProvider
from .example import ExampleProvider

__all__ = [
    'EvolutionProvider',
    'ExampleProvider'
]
