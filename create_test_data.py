"""
create_test_data.py - Populate Database with Test Data
Run this script to create sample dogs, sales, testimonials and a demo customer.

Usage: python create_test_data.py
"""

from app import create_app
from extensions import db
from models import User, Dog, Sale, Testimonial
from passwords import hash_password
from datetime import datetime, timedelta
import random

DOGS = [
    {'breed': 'Labrador Retriever', 'price': 1200, 'age': 3,
     'description': 'Friendly, outgoing and eager to please.', 'image_url': '/assets/images/labrador.jpg'},
    {'breed': 'Golden Retriever', 'price': 1500, 'age': 4,
     'description': 'Gentle family dog that loves to fetch.', 'image_url': '/assets/images/golden.jpg'},
    {'breed': 'Labradoodle', 'price': 1800, 'age': 2,
     'description': 'Low-shedding, playful and smart.', 'image_url': '/assets/images/labradoodle.jpg'},
    {'breed': 'French Bulldog', 'price': 2500, 'age': 5,
     'description': 'Small, calm and great in apartments.', 'image_url': '/assets/images/frenchie.jpg'},
    {'breed': 'Beagle', 'price': 900, 'age': 3,
     'description': 'Curious nose and a big heart.', 'image_url': '/assets/images/beagle.jpg'},
    {'breed': 'German Shepherd', 'price': 1400, 'age': 6,
     'description': 'Loyal, confident and easy to train.', 'image_url': '/assets/images/shepherd.jpg'},
]

TESTIMONIALS = [
    ('Hannah', 'Our new pup settled in on day one. Thank you!'),
    ('Marcus', 'Healthy, happy and exactly as described.'),
    ('Priya', 'The whole family is in love with our Labradoodle.'),
    ('Tom', 'Smooth process from start to finish.'),
]


def create_test_data():
    """Create sample catalogue data for local development"""

    app = create_app('development')

    with app.app_context():
        db.create_all()

        print("🗑️  Clearing existing data...")
        # Clear existing data (be careful with this in production!)
        Testimonial.query.delete()
        Sale.query.delete()
        Dog.query.delete()
        db.session.commit()

        print("🐶 Creating Dogs...")
        dogs = [Dog(**data) for data in DOGS]
        db.session.add_all(dogs)
        db.session.commit()
        print(f"   ✅ Created {len(dogs)} dogs")

        print("🧾 Creating Sales...")
        # Weighted so the home page has a clear top three
        weights = [8, 6, 5, 2, 1, 1]
        sales = []
        for dog, count in zip(dogs, weights):
            for _ in range(count):
                sale = Sale(
                    dog_id=dog.id,
                    sale_date=datetime.utcnow() - timedelta(days=random.randint(1, 365))
                )
                db.session.add(sale)
                sales.append(sale)
        db.session.commit()
        print(f"   ✅ Created {len(sales)} sales")

        print("💬 Creating Testimonials...")
        for sale, (name, content) in zip(random.sample(sales, len(TESTIMONIALS)), TESTIMONIALS):
            db.session.add(Testimonial(sale_id=sale.id, customer_name=name, content=content))
        db.session.commit()
        print(f"   ✅ Created {len(TESTIMONIALS)} testimonials")

        print("👤 Creating demo customer...")
        if User.find_by_email('demo@furryfriends.test') is None:
            db.session.add(User(
                email='demo@furryfriends.test',
                password=hash_password('woof1234'),
                photo_path=app.config['DEFAULT_PHOTO_URL'],
                firstname='Demo',
                lastname='Customer'
            ))
            db.session.commit()
            print("   ✅ demo@furryfriends.test / woof1234")
        else:
            print("   ❌ Demo customer already exists!")


if __name__ == '__main__':
    create_test_data()
