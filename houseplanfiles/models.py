"""
Database Models for the HousePlanFiles API

This module defines all database models using SQLAlchemy ORM. List-valued
fields (categories, countries, gallery images, package features) are stored as
JSON columns so records mirror the payloads the storefront exchanges.
"""

from datetime import datetime

from flask_login import UserMixin
from slugify import slugify
from werkzeug.security import check_password_hash, generate_password_hash

from houseplanfiles.extensions import db, login_manager


def _unique_slug(model, base_slug, exclude_id=None):
    """Generate a unique slug by appending a numeric suffix if needed."""
    base_slug = base_slug or 'item'
    candidate = base_slug
    index = 1
    while True:
        query = model.query.filter_by(slug=candidate)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if query.first() is None:
            return candidate
        candidate = f"{base_slug}-{index}"
        index += 1


@login_manager.user_loader
def load_user(user_id):
    """Load user by ID for Flask-Login"""
    if user_id is None:
        return None
    return db.session.get(User, int(user_id))


class User(UserMixin, db.Model):
    """Customer, seller, professional, contractor or admin account."""

    __tablename__ = 'users'

    ROLE_USER = 'user'
    ROLE_SELLER = 'seller'
    ROLE_PROFESSIONAL = 'professional'
    ROLE_CONTRACTOR = 'contractor'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = (ROLE_USER, ROLE_SELLER, ROLE_PROFESSIONAL, ROLE_CONTRACTOR, ROLE_ADMIN)
    # Roles allowed to list house plans of their own.
    PUBLISHER_ROLES = (ROLE_SELLER, ROLE_PROFESSIONAL, ROLE_ADMIN)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(40))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(30), nullable=False, default=ROLE_USER, index=True)
    business_name = db.Column(db.String(200))
    city = db.Column(db.String(120))
    address = db.Column(db.String(300))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    last_login = db.Column(db.DateTime)

    products = db.relationship('Product', backref='owner', lazy='dynamic')
    orders = db.relationship('Order', backref='customer', lazy='dynamic', cascade='all, delete-orphan')
    seller_products = db.relationship('SellerProduct', backref='seller', lazy='dynamic', cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set user password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def can_publish(self):
        return self.role in self.PUBLISHER_ROLES

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'businessName': self.business_name,
            'city': self.city,
            'address': self.address,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.email}>'


class Product(db.Model):
    """House plan listed in the storefront."""

    __tablename__ = 'products'

    STATUS_PUBLISHED = 'Published'
    STATUS_PENDING = 'Pending Review'
    STATUS_DRAFT = 'Draft'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = (STATUS_PUBLISHED, STATUS_PENDING, STATUS_DRAFT, STATUS_REJECTED)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(250), nullable=False)
    slug = db.Column(db.String(280), unique=True, nullable=False, index=True)
    product_no = db.Column(db.String(60), index=True)
    description = db.Column(db.Text)

    price = db.Column(db.Float, nullable=False, default=0)
    sale_price = db.Column(db.Float)
    is_sale = db.Column(db.Boolean, default=False)
    tax_rate = db.Column(db.Float, default=0)

    category = db.Column(db.JSON, default=list)
    plan_type = db.Column(db.String(60), index=True)
    plot_size = db.Column(db.String(60))
    plot_area = db.Column(db.Float)
    rooms = db.Column(db.Integer)
    bathrooms = db.Column(db.Integer)
    kitchen = db.Column(db.Integer)
    floors = db.Column(db.Integer)
    direction = db.Column(db.String(40))
    country = db.Column(db.JSON, default=list)
    city = db.Column(db.JSON, default=list)
    property_type = db.Column(db.String(60))

    main_image = db.Column(db.String(500))
    plan_files = db.Column(db.JSON, default=list)
    gallery_images = db.Column(db.JSON, default=list)
    youtube_link = db.Column(db.String(300))

    # Key/value pairs carried over from bulk CSV imports ("Images",
    # "Attribute 1 value(s)", ...).
    attributes = db.Column(db.JSON, default=dict)

    rating = db.Column(db.Float, default=0)
    num_reviews = db.Column(db.Integer, default=0)

    seo_title = db.Column(db.String(200))
    seo_description = db.Column(db.String(320))

    status = db.Column(db.String(30), nullable=False, default=STATUS_PUBLISHED, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = db.relationship('Review', backref='product', lazy='selectin', cascade='all, delete-orphan')

    def __init__(self, **kwargs):
        super(Product, self).__init__(**kwargs)
        if not self.slug and self.name:
            self.slug = _unique_slug(Product, slugify(self.name))

    @property
    def categories(self):
        value = self.category
        if isinstance(value, str):
            return [value] if value.strip() else []
        return [c for c in (value or []) if c]

    @property
    def share_slug(self):
        """Slug used by share links: ``<slugified-name>-<id>``."""
        return f"{slugify(self.name or 'plan')}-{self.id}"

    def recalculate_rating(self):
        ratings = [r.rating for r in self.reviews]
        self.num_reviews = len(ratings)
        self.rating = round(sum(ratings) / len(ratings), 2) if ratings else 0

    def __repr__(self):
        return f'<Product {self.name}>'


class Review(db.Model):
    __tablename__ = 'reviews'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('product_id', 'user_id', name='uq_reviews_product_user'),
    )

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'rating': self.rating,
            'comment': self.comment,
            'user': self.user_id,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<Review {self.product_id}:{self.rating}>'


class Order(db.Model):
    """Plan purchase, used to flag products a customer already owns."""

    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='SET NULL'), index=True)
    amount = db.Column(db.Float, nullable=False, default=0)
    currency = db.Column(db.String(3), default='INR')
    is_paid = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(30), default='pending')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    paid_at = db.Column(db.DateTime)

    def __repr__(self):
        return f'<Order {self.id} paid={self.is_paid}>'


class Package(db.Model):
    """Purchasable service tier shown on the packages page."""

    __tablename__ = 'packages'

    TYPE_STANDARD = 'standard'
    TYPE_PREMIUM = 'premium'
    TYPE_CITY_PARTNER = 'city_partner'
    TYPE_CHOICES = (TYPE_STANDARD, TYPE_PREMIUM, TYPE_CITY_PARTNER)

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    # Either a number ("4999") or free text ("₹ 15/sq.ft - Rs 25/sq.ft").
    price = db.Column(db.String(200), nullable=False)
    unit = db.Column(db.String(60))
    area_type = db.Column(db.String(60))
    is_popular = db.Column(db.Boolean, default=False)
    features = db.Column(db.JSON, default=list)
    includes = db.Column(db.JSON, default=list)
    package_type = db.Column(db.String(30), nullable=False, default=TYPE_STANDARD, index=True)
    sort_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Package {self.title}>'


class PackageRequest(db.Model):
    """Lead captured from a standard or premium package card."""

    __tablename__ = 'package_requests'

    TIER_STANDARD = 'standard'
    TIER_PREMIUM = 'premium'

    STATUS_PENDING = 'Pending'
    STATUS_CONTACTED = 'Contacted'
    STATUS_COMPLETED = 'Completed'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = (STATUS_PENDING, STATUS_CONTACTED, STATUS_COMPLETED, STATUS_REJECTED)

    id = db.Column(db.Integer, primary_key=True)
    tier = db.Column(db.String(20), nullable=False, default=TIER_STANDARD, index=True)
    package_name = db.Column(db.String(200), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(200))
    whatsapp_number = db.Column(db.String(40), nullable=False)
    city = db.Column(db.String(120))
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            '_id': self.id,
            'tier': self.tier,
            'packageName': self.package_name,
            'name': self.name,
            'email': self.email,
            'whatsappNumber': self.whatsapp_number,
            'city': self.city,
            'status': self.status,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<PackageRequest {self.tier} {self.package_name!r}>'


class CustomizationRequest(db.Model):
    """Floor plan, elevation, interior or walkthrough customization lead."""

    __tablename__ = 'customization_requests'

    TYPE_FLOOR_PLAN = 'Floor Plan Customization'
    TYPE_ELEVATION = '3D Elevation'
    TYPE_INTERIOR = 'Interior Design'
    TYPE_WALKTHROUGH = '3D Video Walkthrough'
    TYPE_CHOICES = (TYPE_FLOOR_PLAN, TYPE_ELEVATION, TYPE_INTERIOR, TYPE_WALKTHROUGH)

    STATUS_PENDING = 'Pending'
    STATUS_CONTACTED = 'Contacted'
    STATUS_IN_PROGRESS = 'In Progress'
    STATUS_COMPLETED = 'Completed'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = (STATUS_PENDING, STATUS_CONTACTED, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_REJECTED)

    id = db.Column(db.Integer, primary_key=True)
    request_type = db.Column(db.String(60), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    whatsapp_number = db.Column(db.String(40), nullable=False)
    country_name = db.Column(db.String(120))
    plan_for_floor = db.Column(db.String(60))
    elevation_type = db.Column(db.String(60))
    room_width = db.Column(db.String(30))
    room_length = db.Column(db.String(30))
    design_for = db.Column(db.String(120))
    description = db.Column(db.Text)
    details = db.Column(db.Text)
    reference_file = db.Column(db.String(500))
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def summary(self):
        """Details line used by the admin table and CSV export."""
        if self.details:
            return self.details
        parts = []
        if self.plan_for_floor:
            parts.append(f"Floor: {self.plan_for_floor}")
        if self.elevation_type:
            parts.append(f"Elevation: {self.elevation_type}")
        if self.room_width and self.room_length:
            parts.append(f"Room: {self.room_width} x {self.room_length}")
        if self.design_for:
            parts.append(f"Design for: {self.design_for}")
        if self.description:
            parts.append(self.description)
        return '; '.join(parts)

    def to_dict(self):
        return {
            '_id': self.id,
            'requestType': self.request_type,
            'name': self.name,
            'email': self.email,
            'whatsappNumber': self.whatsapp_number,
            'countryName': self.country_name,
            'planForFloor': self.plan_for_floor,
            'elevationType': self.elevation_type,
            'roomWidth': self.room_width,
            'roomLength': self.room_length,
            'designFor': self.design_for,
            'description': self.description,
            'details': self.summary,
            'referenceFile': self.reference_file,
            'status': self.status,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<CustomizationRequest {self.id} {self.request_type!r}>'


class Contractor(db.Model):
    """City Partner listed in the construction partners directory."""

    __tablename__ = 'contractors'

    STATUS_PENDING = 'Pending'
    STATUS_APPROVED = 'Approved'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

    TYPE_STANDARD = 'Standard'
    TYPE_PREMIUM = 'Premium'
    TYPE_CHOICES = (TYPE_STANDARD, TYPE_PREMIUM)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), index=True)
    name = db.Column(db.String(120), nullable=False)
    company_name = db.Column(db.String(200))
    city = db.Column(db.String(120), index=True)
    address = db.Column(db.String(300))
    experience = db.Column(db.String(60))
    photo_url = db.Column(db.String(500))
    shop_image_url = db.Column(db.String(500))
    phone = db.Column(db.String(40))
    profession = db.Column(db.String(120))
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)
    contractor_type = db.Column(db.String(20), nullable=False, default=TYPE_STANDARD)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    inquiries = db.relationship('ContractorInquiry', backref='contractor', lazy='dynamic', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Contractor {self.name}>'


class ContractorInquiry(db.Model):
    __tablename__ = 'contractor_inquiries'

    STATUS_NEW = 'New'
    STATUS_CONTACTED = 'Contacted'
    STATUS_CLOSED = 'Closed'
    STATUS_CHOICES = (STATUS_NEW, STATUS_CONTACTED, STATUS_CLOSED)

    id = db.Column(db.Integer, primary_key=True)
    contractor_id = db.Column(db.Integer, db.ForeignKey('contractors.id', ondelete='CASCADE'), nullable=False, index=True)
    sender_name = db.Column(db.String(120), nullable=False)
    sender_email = db.Column(db.String(200), nullable=False)
    sender_whatsapp = db.Column(db.String(40), nullable=False)
    requirements = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_NEW, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self):
        contractor = self.contractor
        return {
            '_id': self.id,
            'contractor': {'_id': contractor.id, 'name': contractor.name} if contractor else None,
            'senderName': self.sender_name,
            'senderEmail': self.sender_email,
            'senderWhatsapp': self.sender_whatsapp,
            'requirements': self.requirements,
            'status': self.status,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<ContractorInquiry {self.id}>'


class SellerProduct(db.Model):
    """Marketplace item listed by a third-party seller."""

    __tablename__ = 'seller_products'

    STATUS_PENDING = 'Pending'
    STATUS_APPROVED = 'Approved'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

    id = db.Column(db.Integer, primary_key=True)
    seller_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(120), index=True)
    city = db.Column(db.String(120), index=True)
    price = db.Column(db.Float)
    description = db.Column(db.Text)
    image = db.Column(db.String(500))
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    inquiries = db.relationship('SellerInquiry', backref='product', lazy='dynamic', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<SellerProduct {self.name}>'


class SellerInquiry(db.Model):
    __tablename__ = 'seller_inquiries'

    STATUS_NEW = 'New'
    STATUS_CONTACTED = 'Contacted'
    STATUS_CLOSED = 'Closed'
    STATUS_CHOICES = (STATUS_NEW, STATUS_CONTACTED, STATUS_CLOSED)

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('seller_products.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    message = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=STATUS_NEW, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self):
        product = self.product
        return {
            '_id': self.id,
            'product': {'_id': product.id, 'name': product.name} if product else None,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'message': self.message,
            'status': self.status,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<SellerInquiry {self.id}>'


class GalleryItem(db.Model):
    __tablename__ = 'gallery_items'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(120), index=True)
    image_url = db.Column(db.String(500), nullable=False)
    alt_text = db.Column(db.String(300))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            '_id': self.id,
            'title': self.title,
            'category': self.category,
            'imageUrl': self.image_url,
            'altText': self.alt_text or self.title,
            'createdAt': _iso(self.created_at),
        }

    def __repr__(self):
        return f'<GalleryItem {self.title}>'


class BlogPost(db.Model):
    __tablename__ = 'blog_posts'

    STATUS_DRAFT = 'draft'
    STATUS_PUBLISHED = 'published'
    STATUS_CHOICES = (STATUS_DRAFT, STATUS_PUBLISHED)

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(250), nullable=False)
    slug = db.Column(db.String(280), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.String(500))
    meta_title = db.Column(db.String(200))
    meta_description = db.Column(db.String(320))
    main_image = db.Column(db.String(500))
    tags = db.Column(db.JSON, default=list)
    author = db.Column(db.String(120))
    status = db.Column(db.String(20), nullable=False, default=STATUS_PUBLISHED, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, **kwargs):
        super(BlogPost, self).__init__(**kwargs)
        if not self.slug and self.title:
            self.slug = _unique_slug(BlogPost, slugify(self.title))

    def __repr__(self):
        return f'<BlogPost {self.slug}>'


class ContactMessage(db.Model):
    """Inbound contact form submission."""

    __tablename__ = 'messages'

    EMAIL_PENDING = 'pending'
    EMAIL_SENT = 'sent'
    EMAIL_FAILED = 'failed'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(200), nullable=False, index=True)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    email_status = db.Column(db.String(20), nullable=False, default=EMAIL_PENDING)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<ContactMessage {self.id} {self.subject!r}>'


def _iso(value):
    return value.isoformat() if value else None
