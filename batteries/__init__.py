"""
Batteries - UPower device report with renaming and filtering rules
"""

__version__ = "0.1.0"

# The main submodules are exposed here for easy access:
# from batteries import core, cli

__all__ = [
    "core",
    "cli",
]
