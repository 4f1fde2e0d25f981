"""Filtered, paginated admin queues for leads and customers.

Every queue shares the same controls: free-text search over the contact
columns, exact-match filters where ``all`` (or empty) means no filter, an
inclusive date range, newest first, 10 rows per page.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Optional

from sqlalchemy import or_

from houseplanfiles.extensions import db
from houseplanfiles.models import (
    ContractorInquiry,
    CustomizationRequest,
    PackageRequest,
    SellerInquiry,
    User,
)


PER_PAGE = 10


@dataclass(frozen=True)
class ListFilters:
    q: str = ''
    request_type: str = 'all'
    package: str = 'all'
    status: str = 'all'
    date_from: str = ''  # YYYY-MM-DD
    date_to: str = ''    # YYYY-MM-DD
    page: int = 1
    per_page: int = PER_PAGE

    @classmethod
    def from_args(cls, args, per_page: int = PER_PAGE) -> 'ListFilters':
        try:
            page = max(1, int(args.get('page', 1)))
        except (TypeError, ValueError):
            page = 1
        return cls(
            q=(args.get('q') or args.get('search') or '').strip(),
            request_type=(args.get('type') or 'all').strip(),
            package=(args.get('package') or 'all').strip(),
            status=(args.get('status') or 'all').strip(),
            date_from=(args.get('dateFrom') or args.get('startDate') or '').strip(),
            date_to=(args.get('dateTo') or args.get('endDate') or '').strip(),
            page=page,
            per_page=per_page,
        )


@dataclass(frozen=True)
class Queue:
    """How one model maps onto the shared admin list controls."""

    model: type
    search_columns: tuple
    type_column: Optional[object] = None
    package_column: Optional[object] = None
    status_column: Optional[object] = None
    base_filter: Optional[Callable] = None


QUEUES = {
    'customization': Queue(
        model=CustomizationRequest,
        search_columns=(CustomizationRequest.name, CustomizationRequest.email, CustomizationRequest.whatsapp_number),
        type_column=CustomizationRequest.request_type,
        status_column=CustomizationRequest.status,
    ),
    'standard': Queue(
        model=PackageRequest,
        search_columns=(PackageRequest.name, PackageRequest.email, PackageRequest.whatsapp_number, PackageRequest.city),
        package_column=PackageRequest.package_name,
        status_column=PackageRequest.status,
        base_filter=lambda q: q.filter(PackageRequest.tier == PackageRequest.TIER_STANDARD),
    ),
    'premium': Queue(
        model=PackageRequest,
        search_columns=(PackageRequest.name, PackageRequest.email, PackageRequest.whatsapp_number, PackageRequest.city),
        package_column=PackageRequest.package_name,
        status_column=PackageRequest.status,
        base_filter=lambda q: q.filter(PackageRequest.tier == PackageRequest.TIER_PREMIUM),
    ),
    'contractor-inquiries': Queue(
        model=ContractorInquiry,
        search_columns=(ContractorInquiry.sender_name, ContractorInquiry.sender_email, ContractorInquiry.sender_whatsapp),
        status_column=ContractorInquiry.status,
    ),
    'seller-inquiries': Queue(
        model=SellerInquiry,
        search_columns=(SellerInquiry.name, SellerInquiry.email, SellerInquiry.phone),
        status_column=SellerInquiry.status,
    ),
    'customers': Queue(
        model=User,
        search_columns=(User.name, User.email, User.phone),
        base_filter=lambda q: q.filter(User.role == User.ROLE_USER),
    ),
}


def _parse_ymd(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        return None


def _is_set(value: str) -> bool:
    return bool(value) and value.lower() != 'all'


def build_queue_query(queue: Queue, filters: ListFilters):
    model = queue.model
    query = model.query
    if queue.base_filter is not None:
        query = queue.base_filter(query)

    if filters.q:
        like = f"%{filters.q}%"
        query = query.filter(or_(*(column.ilike(like) for column in queue.search_columns)))

    if queue.type_column is not None and _is_set(filters.request_type):
        query = query.filter(queue.type_column == filters.request_type)
    if queue.package_column is not None and _is_set(filters.package):
        query = query.filter(queue.package_column == filters.package)
    if queue.status_column is not None and _is_set(filters.status):
        query = query.filter(queue.status_column == filters.status)

    df = _parse_ymd(filters.date_from) if filters.date_from else None
    dt = _parse_ymd(filters.date_to) if filters.date_to else None
    if df and dt and df > dt:
        df, dt = dt, df
    if df:
        query = query.filter(model.created_at >= datetime.combine(df, time.min))
    if dt:
        query = query.filter(model.created_at <= datetime.combine(dt, time.max))

    return query.order_by(model.created_at.desc(), model.id.desc())


def list_queue(name: str, filters: ListFilters) -> dict:
    query = build_queue_query(QUEUES[name], filters)
    pagination = query.paginate(page=filters.page, per_page=filters.per_page, error_out=False)
    return {
        'items': pagination.items,
        'page': filters.page,
        'pages': max(1, pagination.pages or 1),
        'total': pagination.total,
        'hasNext': pagination.has_next,
    }


def all_rows(name: str, filters: ListFilters):
    """Every row matching the filters (exports ignore pagination)."""
    return build_queue_query(QUEUES[name], filters).all()


def update_status(record, new_status: str, choices) -> bool:
    if new_status not in choices:
        return False
    record.status = new_status
    db.session.commit()
    return True


def distinct_values(column, base_query=None) -> list[str]:
    query = base_query if base_query is not None else db.session.query(column)
    values = {row[0] for row in query.with_entities(column).distinct().all() if row[0]}
    return sorted(values, key=str.lower)
