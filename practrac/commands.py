from datetime import date, timedelta

import click

from practrac.extensions import db
from practrac.models import Coach, CoachActiveTeam, Drill, Player, Practice, PracticePhase, Team

DEMO_EMAIL = "demo@practrac.local"
DEMO_PASSWORD = "practrac123"

DEMO_ROSTER = [
    ("Maya", "Lopez", 1, "Setter", 4, "5'8\"", "Junior"),
    ("Ava", "Chen", 4, "Outside Hitter", 5, "5'11\"", "Senior"),
    ("Sofia", "Patel", 7, "Middle Blocker", 3, "6'1\"", "Sophomore"),
    ("Emma", "Brooks", 9, "Opposite", 4, "5'10\"", "Junior"),
    ("Lily", "Nguyen", 12, "Libero", 5, "5'4\"", "Senior"),
    ("Grace", "Kim", 15, "Defensive Specialist", 2, "5'6\"", "Freshman"),
]

DEMO_DRILLS = [
    {
        "name": "Dynamic Warm-up",
        "category": "Warm-up",
        "duration": 10,
        "difficulty": 1,
        "description": "Jogging, high knees, arm circles and shuffles across the court.",
        "equipment": [],
        "min_players": 1,
        "max_players": 20,
        "focus": ["Movement", "Conditioning"],
    },
    {
        "name": "Butterfly Passing",
        "category": "Passing",
        "duration": 15,
        "difficulty": 2,
        "description": "Serve, pass to target, follow your ball through three lines.",
        "equipment": ["Volleyballs", "Cones"],
        "min_players": 6,
        "max_players": 12,
        "focus": ["Serve receive", "Footwork"],
        "court_diagram": {
            "players": [
                {"x": 120, "y": 80, "type": "offense", "label": "S"},
                {"x": 240, "y": 300, "type": "offense", "label": "P"},
                {"x": 360, "y": 120, "type": "offense", "label": "T"},
            ],
            "arrows": [{"startX": 120, "startY": 80, "endX": 240, "endY": 300}],
            "textLabels": [{"x": 200, "y": 20, "text": "Serve to passer"}],
        },
    },
    {
        "name": "Queen of the Court",
        "category": "Attacking",
        "duration": 20,
        "difficulty": 3,
        "description": "Small-sided rally game; winners stay on the queen side.",
        "equipment": ["Volleyballs", "Net"],
        "min_players": 6,
        "max_players": 18,
        "focus": ["Competition", "Transition"],
    },
]


def create_coach_account(first_name, last_name, email, password):
    email = email.strip().lower()
    if Coach.query.filter_by(email=email).first():
        return None
    coach = Coach(first_name=first_name, last_name=last_name, email=email)
    coach.set_password(password)
    db.session.add(coach)
    db.session.commit()
    return coach


def register_commands(app):
    @app.cli.command("init-db")
    @click.option("--drop", is_flag=True, help="Drop existing tables first.")
    def init_db(drop):
        """Create the database tables."""
        if drop:
            db.drop_all()
        db.create_all()
        click.echo(f"Database ready at {app.config['SQLALCHEMY_DATABASE_URI']}")

    @app.cli.command("create-coach")
    @click.option("--first-name", prompt=True)
    @click.option("--last-name", prompt=True)
    @click.option("--email", prompt=True)
    @click.password_option()
    def create_coach(first_name, last_name, email, password):
        """Create a coach account."""
        coach = create_coach_account(first_name, last_name, email, password)
        if coach is None:
            raise click.ClickException(f"A coach with email '{email}' already exists.")
        click.echo(f"Coach {coach.full_name} created (id {coach.id}).")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Create a demo coach with a team, roster, drills and a practice plan."""
        db.create_all()
        coach = create_coach_account("Demo", "Coach", DEMO_EMAIL, DEMO_PASSWORD)
        if coach is None:
            click.echo(f"Demo coach '{DEMO_EMAIL}' already exists, nothing to do.")
            return

        team = Team(coach_id=coach.id, name="Varsity Eagles", season="Fall 2026", division="Varsity")
        db.session.add(team)
        db.session.flush()
        db.session.add(CoachActiveTeam(coach_id=coach.id, team_id=team.id))

        for first, last, jersey, position, skill, height, year in DEMO_ROSTER:
            db.session.add(Player(
                team_id=team.id,
                first_name=first,
                last_name=last,
                jersey_number=jersey,
                position=position,
                skill_level=skill,
                height=height,
                year=year,
            ))

        drills = [Drill(coach_id=coach.id, is_public=True, **fields) for fields in DEMO_DRILLS]
        db.session.add_all(drills)
        db.session.flush()

        phases = [
            {"name": "Warm-up", "duration": 10, "type": "warm-up", "drills": [drills[0].id]},
            {"name": "Passing", "duration": 15, "type": "skill-development", "drills": [drills[1].id]},
            {"name": "Game play", "duration": 20, "type": "scrimmage", "drills": [drills[2].id]},
            {"name": "Cool-down", "duration": 5, "type": "cool-down", "drills": []},
        ]
        practice = Practice(
            team_id=team.id,
            name="Serve receive focus",
            date=date.today() + timedelta(days=1),
            duration=60,
            objective="Clean first contact under serve pressure",
            estimated_duration=sum(phase["duration"] for phase in phases),
        )
        practice.phases = PracticePhase.build_list(phases)
        db.session.add(practice)
        db.session.commit()

        click.echo(f"Demo data created. Log in as {DEMO_EMAIL} / {DEMO_PASSWORD}")
