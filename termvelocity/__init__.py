"""A terminal 3D asteroid arcade game and the small rendering engine it runs on."""

__version__ = "0.1.0"