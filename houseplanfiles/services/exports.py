"""CSV and Excel exports for the admin queues."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Sequence

from flask import Response
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter


DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


@dataclass(frozen=True)
class Column:
    header: str
    value: Callable


@dataclass(frozen=True)
class ExportSpec:
    columns: Sequence[Column]
    filename: Callable[[], str]
    sheet_title: str


def format_cell(value) -> str:
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    return str(value)


def _static_name(name: str) -> Callable[[], str]:
    return lambda: name


EXPORTS = {
    'customization': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Name', lambda r: r.name),
            Column('Email', lambda r: r.email),
            Column('WhatsApp', lambda r: r.whatsapp_number),
            Column('Request Type', lambda r: r.request_type),
            Column('Status', lambda r: r.status),
            Column('Details', lambda r: r.summary),
            Column('Created At', lambda r: r.created_at),
        ),
        filename=_static_name('all-customization-requests.csv'),
        sheet_title='Customization Requests',
    ),
    'standard': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Package Name', lambda r: r.package_name),
            Column('Customer Name', lambda r: r.name),
            Column('WhatsApp', lambda r: r.whatsapp_number),
            Column('City', lambda r: r.city),
            Column('Status', lambda r: r.status),
            Column('Date', lambda r: r.created_at),
        ),
        filename=_static_name('standard-consultation-requests.csv'),
        sheet_title='Standard Requests',
    ),
    'premium': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Package', lambda r: r.package_name),
            Column('Name', lambda r: r.name),
            Column('WhatsApp', lambda r: r.whatsapp_number),
            Column('Email', lambda r: r.email),
            Column('City', lambda r: r.city),
            Column('Status', lambda r: r.status),
            Column('Date', lambda r: r.created_at),
        ),
        filename=_static_name('premium-consultation-requests.csv'),
        sheet_title='Premium Requests',
    ),
    'contractor-inquiries': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Partner', lambda r: r.contractor.name if r.contractor else ''),
            Column('Name', lambda r: r.sender_name),
            Column('Email', lambda r: r.sender_email),
            Column('WhatsApp', lambda r: r.sender_whatsapp),
            Column('Requirements', lambda r: r.requirements),
            Column('Status', lambda r: r.status),
            Column('Date', lambda r: r.created_at),
        ),
        filename=_static_name('city-partner-inquiries.csv'),
        sheet_title='City Partner Inquiries',
    ),
    'seller-inquiries': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Product', lambda r: r.product.name if r.product else ''),
            Column('Name', lambda r: r.name),
            Column('Email', lambda r: r.email),
            Column('Phone', lambda r: r.phone),
            Column('Message', lambda r: r.message),
            Column('Status', lambda r: r.status),
            Column('Date', lambda r: r.created_at),
        ),
        filename=_static_name('seller-enquiries.csv'),
        sheet_title='Seller Enquiries',
    ),
    'customers': ExportSpec(
        columns=(
            Column('ID', lambda r: r.id),
            Column('Name', lambda r: r.name),
            Column('Email', lambda r: r.email),
            Column('Phone', lambda r: r.phone or 'N/A'),
            Column('Joined On', lambda r: r.created_at),
        ),
        filename=lambda: f"Customers_List_{date.today().isoformat()}.csv",
        sheet_title='Customers',
    ),
}


def build_csv(spec: ExportSpec, rows) -> str:
    """Render rows as CSV. Cells containing quotes, commas or newlines are quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow([c.header for c in spec.columns])
    for row in rows:
        writer.writerow([format_cell(c.value(row)) for c in spec.columns])
    return buf.getvalue()


def build_xlsx(spec: ExportSpec, rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = spec.sheet_title[:31]

    header_fill = PatternFill(start_color='F97316', end_color='F97316', fill_type='solid')
    header_font = Font(color='FFFFFF', bold=True)
    ws.append([c.header for c in spec.columns])
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for row in rows:
        ws.append([format_cell(c.value(row)) for c in spec.columns])

    for idx, column in enumerate(spec.columns, start=1):
        longest = max([len(column.header)] + [len(str(c.value or '')) for c in ws[get_column_letter(idx)]])
        ws.column_dimensions[get_column_letter(idx)].width = min(60, longest + 2)
    ws.freeze_panes = 'A2'

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def export_response(name: str, rows, fmt: str = 'csv') -> Response:
    spec = EXPORTS[name]
    filename = spec.filename()
    if fmt == 'xlsx':
        filename = filename.rsplit('.', 1)[0] + '.xlsx'
        return Response(
            build_xlsx(spec, rows),
            mimetype=XLSX_MIMETYPE,
            headers={'Content-Disposition': f'attachment; filename="{filename}"'},
        )
    return Response(
        build_csv(spec, rows),
        mimetype='text/csv; charset=utf-8',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )
