"""
Pagination and sorting of resource lists
"""
import math
from urllib.parse import urlencode

from .errors import PaginationParameterError
from .hal import CollectionResource

PAGE_PARAM = 'page'
PAGE_ENTRIES_PARAM = 'page_entries'
SORT_PARAM = 'sort'
DEFAULT_SORT = 'name,asc'


class PaginationResult:
    """One page of resources plus what is needed to describe the page"""

    def __init__(self, resources, total_count, paging_active, page=0, page_entries=None):
        self.resources = resources
        self.total_count = total_count
        self.paging_active = paging_active
        self.page = page
        self.page_entries = page_entries

    @property
    def total_pages(self):
        if not self.paging_active or not self.page_entries:
            return 1
        return math.ceil(self.total_count / self.page_entries)


def _sort_key(field):
    def key(item):
        value = item.get(field)
        if value is None:
            return (1, '')
        return (0, str(value).lower())
    return key


def sort_resources(resources, sort_param):
    field, _, direction = (sort_param or DEFAULT_SORT).partition(',')
    field = field.strip() or 'name'
    direction = direction.strip().lower() or 'asc'
    if direction not in ('asc', 'desc'):
        raise PaginationParameterError(f"Invalid sort direction: {direction}")
    ordered = sorted(resources, key=_sort_key(field))
    if direction == 'desc':
        # keep missing values last in both directions
        present = [item for item in ordered if item.get(field) is not None]
        missing = [item for item in ordered if item.get(field) is None]
        ordered = list(reversed(present)) + missing
    return ordered


def _int_param(args, name, default):
    raw = args.get(name)
    if raw in (None, ''):
        return default
    try:
        return int(raw)
    except ValueError:
        raise PaginationParameterError(f"Parameter {name} must be an integer, got '{raw}'")


def create_pagination_result(args, resources, default_page_entries=20):
    """Sort ``resources`` and cut the page requested through ``args``

    Paging is only active when ``page`` or ``page_entries`` is present.
    """
    ordered = sort_resources(resources, args.get(SORT_PARAM))
    total = len(ordered)
    if PAGE_PARAM not in args and PAGE_ENTRIES_PARAM not in args:
        return PaginationResult(ordered, total, paging_active=False)

    page = _int_param(args, PAGE_PARAM, 0)
    page_entries = _int_param(args, PAGE_ENTRIES_PARAM, default_page_entries)
    if page < 0:
        raise PaginationParameterError("Page index must not be negative")
    if page_entries < 1:
        raise PaginationParameterError("Page entries must be at least 1")

    result = PaginationResult([], total, True, page, page_entries)
    if total and page >= result.total_pages:
        raise PaginationParameterError(
            f"Page index {page} out of range, there are only {result.total_pages} pages"
        )
    start = page * page_entries
    result.resources = ordered[start:start + page_entries]
    return result


def _page_href(base_url, args, page, page_entries):
    params = [(key, value) for key, value in args.items(multi=True)
              if key not in (PAGE_PARAM, PAGE_ENTRIES_PARAM)]
    params.extend([(PAGE_PARAM, page), (PAGE_ENTRIES_PARAM, page_entries)])
    return f"{base_url}?{urlencode(params)}"


def generate_pages_resource(pagination_result, resources, base_url, args, default_rel=None):
    """Collection resource for a page, with page metadata and navigation links"""
    collection = CollectionResource(resources, default_rel=default_rel)
    if not pagination_result.paging_active:
        return collection

    page = pagination_result.page
    entries = pagination_result.page_entries
    last = max(pagination_result.total_pages - 1, 0)

    collection.add_link('first', _page_href(base_url, args, 0, entries))
    if page > 0:
        collection.add_link('prev', _page_href(base_url, args, page - 1, entries))
    collection.add_link('self', _page_href(base_url, args, page, entries))
    if page < last:
        collection.add_link('next', _page_href(base_url, args, page + 1, entries))
    collection.add_link('last', _page_href(base_url, args, last, entries))

    collection.page = {
        'size': entries,
        'totalElements': pagination_result.total_count,
        'totalPages': pagination_result.total_pages,
        'number': page,
    }
    return collection
