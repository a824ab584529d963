from app import create_app
from extensions import db
from models import Destination, Guide
from services.destinations import update_destination_rating
from services.guides import update_guide_rating

if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        print("Recomputing ratings from reviews...")

        for guide in Guide.query.all():
            update_guide_rating(guide.id)
            print(f" - guide {guide.name}: {guide.rating} ({guide.review_count} reviews)")

        for destination in Destination.query.all():
            update_destination_rating(destination.id)
            print(f" - destination {destination.name}: {destination.rating} ({destination.review_count} reviews)")

        db.session.commit()
        print("Ratings synced.")
