from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, DecimalField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Regexp, ValidationError

from .utils.money import (
    normalize_invoice_number,
    has_at_most_two_places,
    MAX_FEE,
    MAX_INVOICE_NUMBER_LENGTH,
)

DUPLICATE_INVOICE_MESSAGE = 'A delivery fee with this invoice number already exists.'


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def validate_two_decimal_places(form, field):
    """Reject amounts with fractions of a cent"""
    if field.data is not None and not has_at_most_two_places(field.data):
        raise ValidationError('Fee must have at most two decimal places.')


class BookForm(FlaskForm):
    title = StringField('Title', filters=[_strip], validators=[
        DataRequired(),
        Length(max=200, message='Title must be at most 200 characters')
    ])
    author = StringField('Author', filters=[_strip], validators=[
        DataRequired(),
        Length(max=200, message='Author must be at most 200 characters')
    ])
    submit = SubmitField('Save Book')


class DeliveryFeeForm(FlaskForm):
    """Create form for a delivery fee.

    The invoice number validator records the clashing record on
    ``existing_fee`` so the view can send the user to edit it instead of
    re-rendering the error.
    """
    invoice_number = StringField('Invoice Number', filters=[normalize_invoice_number], validators=[
        DataRequired(),
        Length(max=MAX_INVOICE_NUMBER_LENGTH,
               message=f'Invoice number must be at most {MAX_INVOICE_NUMBER_LENGTH} characters'),
        Regexp(r'^[^/](.*[^/])?$', message='Invoice number cannot start or end with a slash')
    ])
    fee = DecimalField('Fee', places=2, validators=[
        InputRequired(),
        NumberRange(min=0, max=MAX_FEE, message=f'Fee must be between 0 and {MAX_FEE:,}'),
        validate_two_decimal_places
    ])
    submit = SubmitField('Save Delivery Fee')

    def __init__(self, *args, **kwargs):
        super(DeliveryFeeForm, self).__init__(*args, **kwargs)
        self.existing_fee = None

    def validate_invoice_number(self, invoice_number):
        from .services import fee_service
        existing = fee_service.find_existing(invoice_number.data)
        if existing is not None:
            self.existing_fee = existing
            raise ValidationError(DUPLICATE_INVOICE_MESSAGE)

    @property
    def is_duplicate(self):
        return self.existing_fee is not None


class EditDeliveryFeeForm(FlaskForm):
    fee = DecimalField('Fee', places=2, validators=[
        InputRequired(),
        NumberRange(min=0, max=MAX_FEE, message=f'Fee must be between 0 and {MAX_FEE:,}'),
        validate_two_decimal_places
    ])
    submit = SubmitField('Update Delivery Fee')


class ConfirmDeleteForm(FlaskForm):
    """Posted by the shared delete modal; carries only the CSRF token"""
    submit = SubmitField('Delete')
