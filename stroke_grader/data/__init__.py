"""Reference data loading.

Exports the read-only reference store and the bundle loaders.
"""

from .store import ReferenceStore, load_bundle, parse_character, parse_view_box

__all__ = ['ReferenceStore', 'load_bundle', 'parse_character', 'parse_view_box']
