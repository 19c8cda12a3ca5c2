from scoopit.cli import app

app()
