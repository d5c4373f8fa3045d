"""
stormrank package
=================

Ranks severe weather event types in the NOAA Storm Database by harm to
population health and by economic damage, per NWS data-collection era.

- The CLI entry point is in `stormrank/cli.py`.
- The core pipeline is classifier.py -> normalizer.py -> aggregate.py,
  orchestrated by `stormrank/engine.py`.
- Dataset loading is in `stormrank/loader.py`.
"""

__version__ = '0.1.0'
