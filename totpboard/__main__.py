from .dashboard_cli import run

run()
