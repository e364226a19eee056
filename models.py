"""
models.py - Database Models for FurryFriends
Customer accounts plus the read-only dog catalogue, sales and testimonials.
"""

from extensions import db
from flask import current_app
from flask_login import UserMixin
from datetime import datetime
from sqlalchemy import func


class User(UserMixin, db.Model):
    """
    Customer account - local password or Google sign-in
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)  # bcrypt hash or 'google'
    photo_path = db.Column(db.String(500), nullable=True)
    firstname = db.Column(db.String(100), nullable=True)
    lastname = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<User {self.email}>'

    @property
    def is_federated(self):
        """True for accounts created through Google sign-in"""
        return self.password == current_app.config['FEDERATED_PASSWORD_SENTINEL']

    def get_full_name(self):
        """Return full name"""
        return " ".join(part for part in (self.firstname, self.lastname) if part)

    @classmethod
    def find_by_email(cls, email):
        """Exact (case-sensitive) email lookup"""
        return cls.query.filter_by(email=email).first()


class Dog(db.Model):
    """
    Dog listing shown in the catalogue
    """
    __tablename__ = 'dog'

    id = db.Column(db.Integer, primary_key=True)
    breed = db.Column(db.String(100), nullable=False, index=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    age = db.Column(db.Integer, nullable=True)  # Age in months
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)

    # Relationships
    sales = db.relationship('Sale', backref='dog', lazy='dynamic')

    def __repr__(self):
        return f'<Dog {self.id} - {self.breed}>'

    @classmethod
    def search_by_breed(cls, term):
        """
        Case-insensitive substring match on breed

        Args:
            term: search text, e.g. "lab" (% and _ match literally)

        Returns:
            list: matching dogs ordered by id
        """
        return cls.query.filter(
            func.lower(cls.breed).contains(term.lower(), autoescape=True)
        ).order_by(cls.id.asc()).all()

    @classmethod
    def top_sellers(cls, limit=3):
        """
        Best selling dogs, grouped by dog attributes

        Returns:
            list: rows with breed, total_sales, price_dog, age, description, image_url
        """
        total_sales = func.count(Sale.id).label('total_sales')
        return db.session.query(
            cls.breed,
            total_sales,
            cls.price.label('price_dog'),
            cls.age,
            cls.description,
            cls.image_url
        ).join(Sale, cls.id == Sale.dog_id).group_by(
            cls.breed, cls.price, cls.age, cls.description, cls.image_url
        ).order_by(total_sales.desc()).limit(limit).all()


class Sale(db.Model):
    """
    Completed sale of a dog
    """
    __tablename__ = 'sale'

    id = db.Column(db.Integer, primary_key=True)
    dog_id = db.Column(db.Integer, db.ForeignKey('dog.id'), nullable=False)
    sale_date = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    testimonial = db.relationship('Testimonial', backref='sale', uselist=False)

    def __repr__(self):
        return f'<Sale {self.id} dog={self.dog_id}>'


class Testimonial(db.Model):
    """
    Customer testimonial attached to a sale
    """
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True)
    sale_id = db.Column(db.Integer, db.ForeignKey('sale.id'), nullable=False)
    customer_name = db.Column(db.String(100), nullable=True)
    content = db.Column(db.Text, nullable=False)

    def __repr__(self):
        return f'<Testimonial {self.id} sale={self.sale_id}>'

    @staticmethod
    def for_homepage():
        """
        Every sale left-joined to its testimonial (testimonial may be None)

        Returns:
            list: (Sale, Testimonial or None) tuples
        """
        return db.session.query(Sale, Testimonial).outerjoin(
            Testimonial, Sale.id == Testimonial.sale_id
        ).order_by(Sale.id.asc()).all()
