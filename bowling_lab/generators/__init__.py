from bowling_lab.generators.bowler_generator import BowlerGenerator

__all__ = ["BowlerGenerator"]
