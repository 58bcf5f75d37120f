"""Parameter-driven G-code generators for circular pockets, thread milling
and peck drilling."""

__version__ = "0.3.0"
