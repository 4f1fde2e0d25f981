"""Initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=30), nullable=False, server_default='user'),
        sa.Column('business_name', sa.String(length=200)),
        sa.Column('city', sa.String(length=120)),
        sa.Column('address', sa.String(length=300)),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=250), nullable=False),
        sa.Column('slug', sa.String(length=280), nullable=False),
        sa.Column('product_no', sa.String(length=60)),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('sale_price', sa.Float()),
        sa.Column('is_sale', sa.Boolean()),
        sa.Column('tax_rate', sa.Float()),
        sa.Column('category', sa.JSON()),
        sa.Column('plan_type', sa.String(length=60)),
        sa.Column('plot_size', sa.String(length=60)),
        sa.Column('plot_area', sa.Float()),
        sa.Column('rooms', sa.Integer()),
        sa.Column('bathrooms', sa.Integer()),
        sa.Column('kitchen', sa.Integer()),
        sa.Column('floors', sa.Integer()),
        sa.Column('direction', sa.String(length=40)),
        sa.Column('country', sa.JSON()),
        sa.Column('city', sa.JSON()),
        sa.Column('property_type', sa.String(length=60)),
        sa.Column('main_image', sa.String(length=500)),
        sa.Column('plan_files', sa.JSON()),
        sa.Column('gallery_images', sa.JSON()),
        sa.Column('youtube_link', sa.String(length=300)),
        sa.Column('attributes', sa.JSON()),
        sa.Column('rating', sa.Float()),
        sa.Column('num_reviews', sa.Integer()),
        sa.Column('seo_title', sa.String(length=200)),
        sa.Column('seo_description', sa.String(length=320)),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='Published'),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)
    op.create_index('ix_products_product_no', 'products', ['product_no'])
    op.create_index('ix_products_plan_type', 'products', ['plan_type'])
    op.create_index('ix_products_status', 'products', ['status'])
    op.create_index('ix_products_user_id', 'products', ['user_id'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime()),
        sa.UniqueConstraint('product_id', 'user_id', name='uq_reviews_product_user'),
    )
    op.create_index('ix_reviews_product_id', 'reviews', ['product_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='SET NULL')),
        sa.Column('amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(length=3)),
        sa.Column('is_paid', sa.Boolean()),
        sa.Column('status', sa.String(length=30)),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('paid_at', sa.DateTime()),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_product_id', 'orders', ['product_id'])

    op.create_table(
        'packages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('price', sa.String(length=200), nullable=False),
        sa.Column('unit', sa.String(length=60)),
        sa.Column('area_type', sa.String(length=60)),
        sa.Column('is_popular', sa.Boolean()),
        sa.Column('features', sa.JSON()),
        sa.Column('includes', sa.JSON()),
        sa.Column('package_type', sa.String(length=30), nullable=False, server_default='standard'),
        sa.Column('sort_order', sa.Integer()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_packages_package_type', 'packages', ['package_type'])

    op.create_table(
        'package_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tier', sa.String(length=20), nullable=False, server_default='standard'),
        sa.Column('package_name', sa.String(length=200), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=200)),
        sa.Column('whatsapp_number', sa.String(length=40), nullable=False),
        sa.Column('city', sa.String(length=120)),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_package_requests_tier', 'package_requests', ['tier'])
    op.create_index('ix_package_requests_status', 'package_requests', ['status'])
    op.create_index('ix_package_requests_created_at', 'package_requests', ['created_at'])

    op.create_table(
        'customization_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('request_type', sa.String(length=60), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('whatsapp_number', sa.String(length=40), nullable=False),
        sa.Column('country_name', sa.String(length=120)),
        sa.Column('plan_for_floor', sa.String(length=60)),
        sa.Column('elevation_type', sa.String(length=60)),
        sa.Column('room_width', sa.String(length=30)),
        sa.Column('room_length', sa.String(length=30)),
        sa.Column('design_for', sa.String(length=120)),
        sa.Column('description', sa.Text()),
        sa.Column('details', sa.Text()),
        sa.Column('reference_file', sa.String(length=500)),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_customization_requests_request_type', 'customization_requests', ['request_type'])
    op.create_index('ix_customization_requests_status', 'customization_requests', ['status'])
    op.create_index('ix_customization_requests_created_at', 'customization_requests', ['created_at'])

    op.create_table(
        'contractors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('company_name', sa.String(length=200)),
        sa.Column('city', sa.String(length=120)),
        sa.Column('address', sa.String(length=300)),
        sa.Column('experience', sa.String(length=60)),
        sa.Column('photo_url', sa.String(length=500)),
        sa.Column('shop_image_url', sa.String(length=500)),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('profession', sa.String(length=120)),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('contractor_type', sa.String(length=20), nullable=False, server_default='Standard'),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_contractors_user_id', 'contractors', ['user_id'])
    op.create_index('ix_contractors_city', 'contractors', ['city'])
    op.create_index('ix_contractors_status', 'contractors', ['status'])

    op.create_table(
        'contractor_inquiries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('contractor_id', sa.Integer(), sa.ForeignKey('contractors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_name', sa.String(length=120), nullable=False),
        sa.Column('sender_email', sa.String(length=200), nullable=False),
        sa.Column('sender_whatsapp', sa.String(length=40), nullable=False),
        sa.Column('requirements', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='New'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_contractor_inquiries_contractor_id', 'contractor_inquiries', ['contractor_id'])
    op.create_index('ix_contractor_inquiries_status', 'contractor_inquiries', ['status'])
    op.create_index('ix_contractor_inquiries_created_at', 'contractor_inquiries', ['created_at'])

    op.create_table(
        'seller_products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('seller_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=120)),
        sa.Column('city', sa.String(length=120)),
        sa.Column('price', sa.Float()),
        sa.Column('description', sa.Text()),
        sa.Column('image', sa.String(length=500)),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_seller_products_seller_id', 'seller_products', ['seller_id'])
    op.create_index('ix_seller_products_category', 'seller_products', ['category'])
    op.create_index('ix_seller_products_city', 'seller_products', ['city'])
    op.create_index('ix_seller_products_status', 'seller_products', ['status'])
    op.create_index('ix_seller_products_created_at', 'seller_products', ['created_at'])

    op.create_table(
        'seller_inquiries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('seller_products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=40), nullable=False),
        sa.Column('message', sa.Text()),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='New'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_seller_inquiries_product_id', 'seller_inquiries', ['product_id'])
    op.create_index('ix_seller_inquiries_status', 'seller_inquiries', ['status'])
    op.create_index('ix_seller_inquiries_created_at', 'seller_inquiries', ['created_at'])

    op.create_table(
        'gallery_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=120)),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('alt_text', sa.String(length=300)),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_gallery_items_title', 'gallery_items', ['title'])
    op.create_index('ix_gallery_items_category', 'gallery_items', ['category'])
    op.create_index('ix_gallery_items_created_at', 'gallery_items', ['created_at'])

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=250), nullable=False),
        sa.Column('slug', sa.String(length=280), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.String(length=500)),
        sa.Column('meta_title', sa.String(length=200)),
        sa.Column('meta_description', sa.String(length=320)),
        sa.Column('main_image', sa.String(length=500)),
        sa.Column('tags', sa.JSON()),
        sa.Column('author', sa.String(length=120)),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='published'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_status', 'blog_posts', ['status'])
    op.create_index('ix_blog_posts_created_at', 'blog_posts', ['created_at'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('email_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_messages_email', 'messages', ['email'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])


def downgrade():
    for table in (
        'messages',
        'blog_posts',
        'gallery_items',
        'seller_inquiries',
        'seller_products',
        'contractor_inquiries',
        'contractors',
        'customization_requests',
        'package_requests',
        'packages',
        'orders',
        'reviews',
        'products',
        'users',
    ):
        op.drop_table(table)
