"""
WTForms Form Classes for the HousePlanFiles API

Forms validate JSON bodies and multipart submissions. CSRF is disabled for
all of them: the API authenticates with bearer tokens, not cookies.
"""

import re

from flask import request
from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField
from werkzeug.datastructures import CombinedMultiDict, MultiDict
from wtforms import BooleanField, Field, FloatField, IntegerField, PasswordField, SelectField, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, Email, Length, NumberRange, Optional, StopValidation, ValidationError

from houseplanfiles.models import (
    BlogPost,
    Contractor,
    CustomizationRequest,
    Package,
    PackageRequest,
    Product,
    SellerProduct,
    User,
)


_FALSE_VALUES = (False, 'false', 'False', '0', 0, 'off', '')


def request_formdata():
    """Return the request payload as form data.

    Multipart bodies are passed through (files included). JSON objects are
    flattened into a MultiDict: lists become repeated keys, nulls are dropped.
    """
    if request.files:
        return CombinedMultiDict((request.files, request.form))
    if request.form:
        return request.form

    payload = request.get_json(silent=True)
    data = MultiDict()
    if not isinstance(payload, dict):
        return data
    for key, value in payload.items():
        if value is None or isinstance(value, dict):
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    data.add(key, item)
        else:
            data.add(key, value)
    return data


class Present:
    """Like InputRequired, but a submitted 0 counts as present."""

    field_flags = {"required": True}

    def __init__(self, message=None):
        self.message = message or 'This field is required.'

    def __call__(self, form, field):
        if not field.raw_data or field.raw_data[0] in (None, ''):
            field.errors[:] = []
            raise StopValidation(self.message)


def _snake(name):
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


class TextValueField(StringField):
    """StringField that accepts numbers from JSON bodies."""

    def process_formdata(self, valuelist):
        if valuelist:
            value = valuelist[0]
            self.data = '' if value is None else str(value).strip()


class StringListField(Field):
    """List of strings from repeated keys, a JSON array or a comma list."""

    def _value(self):
        return ', '.join(self.data or [])

    def process_formdata(self, valuelist):
        values = []
        for raw in valuelist:
            if raw is None:
                continue
            parts = str(raw).split(',') if len(valuelist) == 1 else [str(raw)]
            values.extend(p.strip() for p in parts if p.strip())
        self.data = values

    def process_data(self, value):
        self.data = list(value or [])


class ApiForm(FlaskForm):
    """Base form for API payloads."""

    class Meta:
        csrf = False

    # Form field name -> model attribute, where camelCase -> snake_case is not enough.
    field_map = {}

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('formdata', request_formdata())
        super().__init__(*args, **kwargs)

    @property
    def provided(self):
        """Names of fields present in the submitted payload."""
        return [name for name, field in self._fields.items() if field.raw_data]

    def validate_partial(self):
        """Validate only the submitted fields (used by PUT handlers)."""
        success = True
        for name in self.provided:
            field = self._fields[name]
            inline = getattr(self.__class__, f'validate_{name}', None)
            extra = [lambda form, fld, fn=inline: fn(form, fld)] if inline else []
            if not field.validate(self, extra):
                success = False
        return success

    def apply_to(self, obj, only=None):
        """Copy field data onto ``obj``; ``only`` restricts to those field names."""
        for name, field in self._fields.items():
            if only is not None and name not in only:
                continue
            if isinstance(field, FileField):
                continue
            setattr(obj, self.field_map.get(name, _snake(name)), field.data)
        return obj

    def first_error(self):
        for name, messages in self.errors.items():
            if messages:
                return f"{name}: {messages[0]}"
        return 'Invalid request.'


class LooseBooleanField(BooleanField):
    false_values = _FALSE_VALUES


class RegisterForm(ApiForm):
    name = TextValueField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=120, message='Name must be 120 characters or less'),
    ])
    email = TextValueField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address'),
        Length(max=255),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=6, message='Password must be at least 6 characters'),
    ])
    phone = TextValueField('Phone', validators=[Optional(), Length(max=40)])
    role = SelectField('Role', choices=[
        (User.ROLE_USER, 'Customer'),
        (User.ROLE_SELLER, 'Seller'),
        (User.ROLE_PROFESSIONAL, 'Professional'),
        (User.ROLE_CONTRACTOR, 'Contractor'),
    ], default=User.ROLE_USER, validators=[Optional()])
    businessName = TextValueField('Business name', validators=[Optional(), Length(max=200)])
    city = TextValueField('City', validators=[Optional(), Length(max=120)])
    address = TextValueField('Address', validators=[Optional(), Length(max=300)])

    def validate_email(self, email):
        if User.query.filter_by(email=(email.data or '').lower()).first():
            raise ValidationError('User already exists with this email.')


class LoginForm(ApiForm):
    email = TextValueField('Email', validators=[DataRequired(message='Email is required')])
    password = PasswordField('Password', validators=[DataRequired(message='Password is required')])


class ProfileForm(ApiForm):
    name = TextValueField('Name', validators=[DataRequired(), Length(max=120)])
    phone = TextValueField('Phone', validators=[Optional(), Length(max=40)])
    businessName = TextValueField('Business name', validators=[Optional(), Length(max=200)])
    city = TextValueField('City', validators=[Optional(), Length(max=120)])
    address = TextValueField('Address', validators=[Optional(), Length(max=300)])
    password = PasswordField('Password', validators=[Optional(), Length(min=6)])


class ProductForm(ApiForm):
    name = TextValueField('Name', validators=[
        DataRequired(message='Product name is required'),
        Length(max=250),
    ])
    description = TextAreaField('Description', validators=[Optional()])
    price = FloatField('Price', validators=[
        Present(message='Price is required'),
        NumberRange(min=0, message='Price cannot be negative'),
    ])
    salePrice = FloatField('Sale price', validators=[Optional(), NumberRange(min=0)])
    isSale = LooseBooleanField('On sale')
    taxRate = FloatField('Tax rate', validators=[Optional(), NumberRange(min=0, max=100)])
    productNo = TextValueField('Product number', validators=[Optional(), Length(max=60)])
    category = StringListField('Category')
    planType = TextValueField('Plan type', validators=[Optional(), Length(max=60)])
    plotSize = TextValueField('Plot size', validators=[Optional(), Length(max=60)])
    plotArea = FloatField('Plot area', validators=[Optional(), NumberRange(min=0)])
    rooms = IntegerField('Rooms', validators=[Optional(), NumberRange(min=0)])
    bathrooms = IntegerField('Bathrooms', validators=[Optional(), NumberRange(min=0)])
    kitchen = IntegerField('Kitchen', validators=[Optional(), NumberRange(min=0)])
    floors = IntegerField('Floors', validators=[Optional(), NumberRange(min=0)])
    direction = TextValueField('Direction', validators=[Optional(), Length(max=40)])
    country = StringListField('Country')
    city = StringListField('City')
    propertyType = TextValueField('Property type', validators=[Optional(), Length(max=60)])
    mainImage = TextValueField('Main image', validators=[Optional(), Length(max=500)])
    galleryImages = StringListField('Gallery images')
    planFile = StringListField('Plan files')
    youtubeLink = TextValueField('YouTube link', validators=[Optional(), Length(max=300)])
    seoTitle = TextValueField('SEO title', validators=[Optional(), Length(max=200)])
    seoDescription = TextValueField('SEO description', validators=[Optional(), Length(max=320)])
    status = TextValueField('Status', validators=[Optional(), AnyOf(Product.STATUS_CHOICES, message='Invalid status')])

    field_map = {'planFile': 'plan_files'}


class ReviewForm(ApiForm):
    rating = IntegerField('Rating', validators=[
        Present(message='Rating is required'),
        NumberRange(min=1, max=5, message='Rating must be between 1 and 5'),
    ])
    comment = TextAreaField('Comment', validators=[
        DataRequired(message='Comment is required'),
        Length(max=2000),
    ])


class PackageForm(ApiForm):
    title = TextValueField('Title', validators=[DataRequired(message='Title is required'), Length(max=200)])
    price = TextValueField('Price', validators=[DataRequired(message='Price is required'), Length(max=200)])
    unit = TextValueField('Unit', validators=[Optional(), Length(max=60)])
    areaType = TextValueField('Area type', validators=[Optional(), Length(max=60)])
    isPopular = LooseBooleanField('Popular')
    features = StringListField('Features')
    includes = StringListField('Includes')
    packageType = SelectField('Package type', choices=[(t, t) for t in Package.TYPE_CHOICES],
                              default=Package.TYPE_STANDARD, validators=[Optional()])
    sortOrder = IntegerField('Sort order', validators=[Optional()])


class PackageRequestForm(ApiForm):
    tier = SelectField('Tier', choices=[
        (PackageRequest.TIER_STANDARD, 'Standard'),
        (PackageRequest.TIER_PREMIUM, 'Premium'),
    ], default=PackageRequest.TIER_STANDARD, validators=[Optional()])
    packageName = TextValueField('Package', validators=[DataRequired(message='Package name is required'), Length(max=200)])
    name = TextValueField('Name', validators=[DataRequired(message='Name is required'), Length(max=120)])
    email = TextValueField('Email', validators=[Optional(), Email(message='Invalid email address'), Length(max=200)])
    whatsappNumber = TextValueField('WhatsApp', validators=[
        DataRequired(message='WhatsApp number is required'),
        Length(min=7, max=40, message='Enter a valid WhatsApp number'),
    ])
    city = TextValueField('City', validators=[Optional(), Length(max=120)])


class StatusForm(ApiForm):
    status = TextValueField('Status', validators=[DataRequired(message='Status is required')])


class CustomizationRequestForm(ApiForm):
    requestType = SelectField('Request type', choices=[(t, t) for t in CustomizationRequest.TYPE_CHOICES],
                              validators=[DataRequired(message='Request type is required')])
    name = TextValueField('Name', validators=[DataRequired(message='Name is required'), Length(max=120)])
    email = TextValueField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address'),
        Length(max=200),
    ])
    whatsappNumber = TextValueField('WhatsApp', validators=[
        DataRequired(message='WhatsApp number is required'),
        Length(min=7, max=40),
    ])
    countryName = TextValueField('Country', validators=[Optional(), Length(max=120)])
    planForFloor = TextValueField('Floor', validators=[Optional(), Length(max=60)])
    elevationType = TextValueField('Elevation type', validators=[Optional(), Length(max=60)])
    roomWidth = TextValueField('Room width', validators=[Optional(), Length(max=30)])
    roomLength = TextValueField('Room length', validators=[Optional(), Length(max=30)])
    designFor = TextValueField('Design for', validators=[Optional(), Length(max=120)])
    description = TextAreaField('Description', validators=[Optional(), Length(max=5000)])
    details = TextAreaField('Details', validators=[Optional(), Length(max=5000)])
    referenceFile = FileField('Reference file', validators=[
        FileAllowed(['png', 'jpg', 'jpeg', 'webp', 'pdf', 'dwg'], 'Images, PDF or DWG only'),
    ])


class ContractorForm(ApiForm):
    name = TextValueField('Name', validators=[DataRequired(), Length(max=120)])
    companyName = TextValueField('Company', validators=[Optional(), Length(max=200)])
    city = TextValueField('City', validators=[Optional(), Length(max=120)])
    address = TextValueField('Address', validators=[Optional(), Length(max=300)])
    experience = TextValueField('Experience', validators=[Optional(), Length(max=60)])
    photoUrl = TextValueField('Photo', validators=[Optional(), Length(max=500)])
    shopImageUrl = TextValueField('Shop image', validators=[Optional(), Length(max=500)])
    phone = TextValueField('Phone', validators=[Optional(), Length(max=40)])
    profession = TextValueField('Profession', validators=[Optional(), Length(max=120)])
    status = SelectField('Status', choices=[(s, s) for s in Contractor.STATUS_CHOICES],
                         default=Contractor.STATUS_PENDING, validators=[Optional()])
    contractorType = SelectField('Type', choices=[(t, t) for t in Contractor.TYPE_CHOICES],
                                 default=Contractor.TYPE_STANDARD, validators=[Optional()])


class ContractorInquiryForm(ApiForm):
    senderName = TextValueField('Name', validators=[DataRequired(message='Name is required'), Length(max=120)])
    senderEmail = TextValueField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address'),
    ])
    senderWhatsapp = TextValueField('WhatsApp', validators=[
        DataRequired(message='WhatsApp number is required'),
        Length(min=7, max=40),
    ])
    requirements = TextAreaField('Requirements', validators=[
        DataRequired(message='Please describe your requirements'),
        Length(max=5000),
    ])


class SellerProductForm(ApiForm):
    name = TextValueField('Name', validators=[DataRequired(message='Product name is required'), Length(max=200)])
    category = TextValueField('Category', validators=[Optional(), Length(max=120)])
    city = TextValueField('City', validators=[Optional(), Length(max=120)])
    price = FloatField('Price', validators=[Optional(), NumberRange(min=0)])
    description = TextAreaField('Description', validators=[Optional()])
    image = TextValueField('Image', validators=[Optional(), Length(max=500)])
    status = TextValueField('Status', validators=[Optional(), AnyOf(SellerProduct.STATUS_CHOICES, message='Invalid status')])


class SellerInquiryForm(ApiForm):
    name = TextValueField('Name', validators=[DataRequired(message='Name is required'), Length(max=120)])
    email = TextValueField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address'),
    ])
    phone = TextValueField('Phone', validators=[DataRequired(message='Phone is required'), Length(min=7, max=40)])
    message = TextAreaField('Message', validators=[Optional(), Length(max=5000)])


class GalleryItemForm(ApiForm):
    title = TextValueField('Title', validators=[DataRequired(message='Title is required'), Length(max=200)])
    category = TextValueField('Category', validators=[Optional(), Length(max=120)])
    imageUrl = TextValueField('Image URL', validators=[Optional(), Length(max=500)])
    altText = TextValueField('Alt text', validators=[Optional(), Length(max=300)])
    image = FileField('Image', validators=[FileAllowed(['png', 'jpg', 'jpeg', 'webp', 'gif'], 'Images only')])


class BlogPostForm(ApiForm):
    title = TextValueField('Title', validators=[DataRequired(message='Title is required'), Length(max=250)])
    content = TextAreaField('Content', validators=[DataRequired(message='Content is required')])
    excerpt = TextValueField('Excerpt', validators=[Optional(), Length(max=500)])
    metaTitle = TextValueField('Meta title', validators=[Optional(), Length(max=200)])
    metaDescription = TextValueField('Meta description', validators=[Optional(), Length(max=320)])
    mainImage = TextValueField('Main image', validators=[Optional(), Length(max=500)])
    tags = StringListField('Tags')
    author = TextValueField('Author', validators=[Optional(), Length(max=120)])
    status = SelectField('Status', choices=[(s, s) for s in BlogPost.STATUS_CHOICES],
                         default=BlogPost.STATUS_PUBLISHED, validators=[Optional()])


class ContactForm(ApiForm):
    name = TextValueField('Name', validators=[DataRequired(message='Name is required'), Length(max=120)])
    email = TextValueField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address'),
    ])
    message = TextAreaField('Message', validators=[
        DataRequired(message='Message is required'),
        Length(max=5000),
    ])


class VoiceCommandForm(ApiForm):
    transcript = TextValueField('Transcript', validators=[Optional(), Length(max=500)])
    pathname = TextValueField('Path', validators=[Optional(), Length(max=300)])
