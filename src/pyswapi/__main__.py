from pyswapi.cli import run

raise SystemExit(run())
