"""
Convenience entry point for running businesshours directly.

Usage: python -m businesshours [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
