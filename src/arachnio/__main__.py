"""Permite ejecutar la consola con `python -m arachnio`."""

from __future__ import annotations

from arachnio.cli.main import run

if __name__ == "__main__":
    run()
