"""
Bowling Strategy Lab - seeded delivery planning for cricket bowlers.
"""
__version__ = "0.1.0"
