"""
blueprints/shop/routes.py - Shop Blueprint
Home page, dog catalogue, detail pages, breed search and checkout.
"""

from flask import Blueprint, render_template, request, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Dog, Testimonial

# Initialize the blueprint for storefront pages
shop_bp = Blueprint('shop', __name__)


@shop_bp.app_context_processor
def inject_account():
    """
    Every page shows the account photo when someone is signed in
    """
    try:
        if current_user.is_authenticated:
            return {'is_logged_in': True, 'user_photo_url': current_user.photo_path}
    except SQLAlchemyError:
        # Error pages still render when the user cannot be loaded
        db.session.rollback()
    return {'is_logged_in': False, 'user_photo_url': None}


@shop_bp.route('/')
def index():
    """
    Home page with the best sellers and customer testimonials
    """
    top_selling_dogs = Dog.top_sellers(limit=current_app.config['BESTSELLER_LIMIT'])

    testimonials = [
        {'sale': sale, 'testimonial': testimonial}
        for sale, testimonial in Testimonial.for_homepage()
    ]

    return render_template(
        'index.html',
        list_items=top_selling_dogs,
        testimonials=testimonials
    )


@shop_bp.route('/dogs')
def dogs():
    """
    Full catalogue ordered by id
    """
    all_dogs = Dog.query.order_by(Dog.id.asc()).all()
    return render_template('product.html', dogs=all_dogs, no_dogs_found=False)


@shop_bp.route('/dogs/<int:dog_id>')
def dog_detail(dog_id):
    """
    Detail page for one dog, 404 if the id is unknown
    """
    dog = db.get_or_404(Dog, dog_id)
    return render_template('detail.html', dog=dog)


@shop_bp.route('/search', methods=['POST'])
def search():
    """
    Case-insensitive breed search
    An empty result renders the catalogue with a "no results" message
    """
    term = request.form.get('search', '').strip()

    if not term:
        results = Dog.query.order_by(Dog.id.asc()).all()
    else:
        results = Dog.search_by_breed(term)

    return render_template(
        'product.html',
        dogs=results,
        no_dogs_found=not results,
        search_term=term
    )


@shop_bp.route('/checkout')
@login_required
def checkout():
    """
    Checkout placeholder (signed-in users only)
    """
    return render_template('checkout.html')
