"""Game logic toolkit: geometry, platformer physics, particle emitters, small game models and a sound registry."""

__version__ = "0.1.0"