import os

from app import create_app
from extensions import db
from models.user import User

app = create_app()

with app.app_context():
    settings = app.extensions["settings"]
    if not settings.admin_email:
        print("ADMIN_EMAIL is not set, nothing to do.")
    else:
        email = settings.admin_email.strip().lower()
        existing_admin = User.query.filter_by(email=email).first()
        if existing_admin:
            print(f"Admin account {email} already exists!")
        else:
            admin = User(name="Admin", email=email, provider="credentials")
            admin.set_password(os.getenv("ADMIN_PASSWORD", "admin12345"))
            db.session.add(admin)
            db.session.commit()
            print(f"Admin account {email} created successfully!")
