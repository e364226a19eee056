"""Shared test fixtures."""

from decimal import Decimal

import pytest
from flask import current_app

from app import create_app
from extensions import db
from models import Dog, Sale, Testimonial, User
from passwords import hash_password

# breed -> number of sales
CATALOGUE = [
    ('Labrador Retriever', 3),
    ('Golden Retriever', 2),
    ('Beagle', 1),
    ('Labradoodle', 4),
    ('Chocolate LAB Mix', 0),
]


@pytest.fixture
def app():
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        _seed_catalogue()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


def _seed_catalogue():
    for index, (breed, sale_count) in enumerate(CATALOGUE, start=1):
        dog = Dog(
            breed=breed,
            price=Decimal('1000.00') + index * 100,
            age=index + 1,
            description=f'A lovely {breed}.',
            image_url=f'/assets/images/dog{index}.jpg'
        )
        db.session.add(dog)
        db.session.flush()
        for _ in range(sale_count):
            db.session.add(Sale(dog_id=dog.id))
    db.session.flush()

    first_sale = Sale.query.order_by(Sale.id.asc()).first()
    db.session.add(Testimonial(sale_id=first_sale.id, customer_name='Hannah', content='Best pup ever!'))
    db.session.commit()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Insert a local account directly and return its id."""

    def _make_user(email='owner@example.com', password='s3cret-pass', **fields):
        with app.app_context():
            user = User(
                email=email,
                password=hash_password(password),
                photo_path=fields.pop('photo_path', current_app.config['DEFAULT_PHOTO_URL']),
                **fields
            )
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


class AuthActions:
    def __init__(self, client):
        self._client = client

    def register(self, email='new@example.com', password='s3cret-pass', firstname='Ada', lastname='Lovelace'):
        return self._client.post('/register', data={
            'email': email,
            'password': password,
            'firstname': firstname,
            'lastname': lastname,
        })

    def login(self, email='owner@example.com', password='s3cret-pass'):
        return self._client.post('/login', data={'email': email, 'password': password})

    def logout(self):
        return self._client.get('/logout')

    def session_user_id(self):
        with self._client.session_transaction() as sess:
            return sess.get('_user_id')


@pytest.fixture
def auth(client):
    return AuthActions(client)


@pytest.fixture
def count_users(app):
    def _count_users(email=None):
        with app.app_context():
            query = User.query
            if email is not None:
                query = query.filter_by(email=email)
            return query.count()

    return _count_users
