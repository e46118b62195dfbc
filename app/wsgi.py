from app.feedboard import create_app

app = create_app()
