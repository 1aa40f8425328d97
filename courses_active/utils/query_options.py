"""Field projection and sort parsing for course queries.

Callers name the course fields they want on top of BASE_FIELDS, and pass a
sort either as "visible DESC, fullname ASC" or as [('visible', 'DESC'), ...].
Both are checked against the columns of the courses table before any query
is built.
"""
from ..errors import InvalidFieldRequest, InvalidSortRequest, InvalidLimit
from ..models.course import Course

ALL_FIELDS = '*'

BASE_FIELDS = ('id', 'category', 'sortorder',
               'shortname', 'fullname', 'idnumber',
               'startdate', 'visible',
               'groupmode', 'groupmodeforce')

DEFAULT_SORT = 'visible DESC, fullname ASC'

SORT_DIRECTIONS = ('ASC', 'DESC')

TABLE_PREFIX = 'c.'


def course_fields():
    return Course.column_names()


def _unique(names):
    seen = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return tuple(seen)


def normalize_fields(fields=None):
    """Return the tuple of course fields to select.

    Requested fields are added to BASE_FIELDS and de-duplicated. A '*' anywhere
    in the request collapses the result to ('*',), meaning every column.
    """
    if not fields:
        requested = []
    elif isinstance(fields, str):
        requested = [name.strip() for name in fields.split(',')]
    elif isinstance(fields, (list, tuple, set, frozenset)):
        requested = list(fields)
    else:
        raise InvalidFieldRequest(f'Invalid fields parameter: {type(fields).__name__}')

    for name in requested:
        if not isinstance(name, str):
            raise InvalidFieldRequest(f'Invalid field name: {name!r}')

    requested = [name.strip() for name in requested if name.strip()]
    if ALL_FIELDS in requested:
        return (ALL_FIELDS,)

    known = course_fields()
    for name in requested:
        if name not in known:
            raise InvalidFieldRequest(f'Unknown course field: {name}')

    return _unique(list(BASE_FIELDS) + requested)


def expand_fields(fields):
    """Resolve the '*' sentinel into the concrete column list"""
    if fields == (ALL_FIELDS,):
        return course_fields()
    return fields


def _strip_prefix(name):
    name = name.strip()
    if name.startswith(TABLE_PREFIX):
        name = name[len(TABLE_PREFIX):]
    return name.strip()


def _split_sort_string(sort):
    pairs = []
    for rawsort in sort.split(','):
        parts = rawsort.split()
        if not parts:
            continue
        if len(parts) > 2:
            raise InvalidSortRequest(f'Invalid sort key: {rawsort.strip()}')
        pairs.append((parts[0], parts[1] if len(parts) == 2 else 'ASC'))
    return pairs


def parse_sort(sort=DEFAULT_SORT):
    """Return a list of (field, direction) pairs validated against the courses table"""
    if sort is None:
        return []
    if isinstance(sort, str):
        pairs = _split_sort_string(sort.strip())
    elif isinstance(sort, (list, tuple)):
        pairs = []
        for item in sort:
            if isinstance(item, str):
                pairs.extend(_split_sort_string(item))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                pairs.append(tuple(item))
            else:
                raise InvalidSortRequest(f'Invalid sort key: {item!r}')
    else:
        raise InvalidSortRequest(f'Invalid sort parameter: {type(sort).__name__}')

    known = course_fields()
    parsed = []
    for field, direction in pairs:
        if not isinstance(field, str) or not isinstance(direction, str):
            raise InvalidSortRequest(f'Invalid sort key: {(field, direction)!r}')
        field = _strip_prefix(field)
        direction = direction.strip().upper()
        if field not in known:
            raise InvalidSortRequest(f'Unknown sort field: {field}')
        if direction not in SORT_DIRECTIONS:
            raise InvalidSortRequest(f'Unknown sort direction: {direction}')
        parsed.append((field, direction))
    return parsed


def validate_limit(limit):
    # bool is an int subclass but never a sensible row count
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise InvalidLimit(f'Limit must be a non-negative integer, got {limit!r}')
    return limit
