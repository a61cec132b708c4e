"""Scene, camera and stage-loading logic for a USD viewport."""

__version__ = "0.2.0"