"""Defense Drill - Entry Point.

Usage:
    python main.py drills list --category "Self Defense"
    python main.py drills pick --skip 1
    python main.py policies set "Weekday office" -f once_per_1_hour --days mon-fri --from 9 --to 17
    python main.py attack next
    python main.py attack run
"""

import typer

from defense_drill.cli.attack import app as attack_app
from defense_drill.cli.drills import app as drills_app
from defense_drill.cli.policies import app as policies_app

# Main Typer Application
app = typer.Typer(
    name="defense-drill",
    help="Defense Drill - drill practice reminders and simulated attacks",
    no_args_is_help=True,
)

# Register sub-applications
app.add_typer(drills_app, name="drills", help="Drill catalog and weighted suggestions")
app.add_typer(policies_app, name="policies", help="Weekly simulated attack policies")
app.add_typer(attack_app, name="attack", help="Simulated attack alarms")


if __name__ == "__main__":
    app()
