"""
Delivery fee routes.

Creating a fee whose invoice number is already recorded does not produce a
second record. The invalid-form handler looks the existing record up and
redirects to its edit page instead of re-rendering the form.
"""

import logging

from flask import Blueprint, render_template, redirect, url_for, flash, abort

from ..forms import DeliveryFeeForm, EditDeliveryFeeForm, ConfirmDeleteForm
from ..services import fee_service, RecordNotFoundError, DuplicateRecordError

logger = logging.getLogger(__name__)

fee_bp = Blueprint('fees', __name__)


def _get_fee_or_404(invoice_number):
    try:
        return fee_service.get_fee(invoice_number)
    except RecordNotFoundError:
        abort(404)


def _redirect_to_existing(invoice_number):
    flash(f'Delivery fee for invoice {invoice_number} already exists. You can edit it below.', 'warning')
    return redirect(url_for('fees.edit_fee', invoice_number=invoice_number))


def _handle_invalid_fee_form(form):
    """Called when the create form fails validation.

    A duplicate invoice number sends the user to the existing record;
    anything else re-renders the form with its field errors.
    """
    if form.is_duplicate:
        existing = form.existing_fee
        logger.info(f"Redirecting duplicate submission to existing invoice {existing.invoice_number}")
        return _redirect_to_existing(existing.invoice_number)
    return render_template('fees/create.html', form=form)


@fee_bp.route('/')
def list_fees():
    fees = fee_service.list_fees()
    return render_template(
        'fees/list.html',
        fees=fees,
        total=fee_service.total_fees(),
        delete_form=ConfirmDeleteForm(),
    )


@fee_bp.route('/new', methods=['GET', 'POST'])
def create_fee():
    form = DeliveryFeeForm()
    if not form.is_submitted():
        return render_template('fees/create.html', form=form)
    if not form.validate():
        return _handle_invalid_fee_form(form)

    try:
        fee = fee_service.create_fee(form.invoice_number.data, form.fee.data)
    except DuplicateRecordError as e:
        # Another request stored the same invoice between validation and insert
        return _redirect_to_existing(e.key)

    flash(f'Recorded delivery fee for invoice {fee.invoice_number}.', 'success')
    return redirect(url_for('fees.list_fees'))


@fee_bp.route('/<path:invoice_number>/edit', methods=['GET', 'POST'])
def edit_fee(invoice_number):
    record = _get_fee_or_404(invoice_number)
    form = EditDeliveryFeeForm(obj=record)
    if form.validate_on_submit():
        try:
            fee_service.update_fee(record.invoice_number, form.fee.data)
        except RecordNotFoundError:
            abort(404)
        flash(f'Updated delivery fee for invoice {record.invoice_number}.', 'success')
        return redirect(url_for('fees.list_fees'))
    return render_template('fees/edit.html', form=form, record=record)


@fee_bp.route('/<path:invoice_number>/delete', methods=['GET', 'POST'])
def delete_fee(invoice_number):
    record = _get_fee_or_404(invoice_number)
    form = ConfirmDeleteForm()
    if form.validate_on_submit():
        try:
            fee_service.delete_fee(record.invoice_number)
        except RecordNotFoundError:
            abort(404)
        flash(f'Deleted delivery fee for invoice {record.invoice_number}.', 'success')
        return redirect(url_for('fees.list_fees'))
    return render_template(
        'confirm_delete.html',
        form=form,
        record_label=record.display_label,
        delete_url=url_for('fees.delete_fee', invoice_number=record.invoice_number),
        cancel_url=url_for('fees.list_fees'),
    )
