"""Testing utilities for DocuifyLib consumers."""

from .fixtures import StaticSource, RecordingPlugin, make_items

__all__ = ['StaticSource', 'RecordingPlugin', 'make_items']
