"""Form decoding - turns a submitted form into column values.

Nothing here rejects input. A field that is missing or cannot be parsed
decodes to ``None``; a checkbox decodes to ``True`` only when the browser
sent the literal ``"on"``.
"""
from datetime import datetime, date
from decimal import Decimal, InvalidOperation


class Field:
    """A single form field bound to a model column of the same name."""

    def __init__(self, name, kind='text', label=None, choices=None, digits=None):
        self.name = name
        self.kind = kind  # text, textarea, int, decimal, date, datetime, bool, select, fk
        self.label = label or name.replace('_', ' ').title()
        # list of values for 'select', callable returning (id, label) pairs for 'fk'
        self.choices = choices
        # (precision, scale) of a Numeric column; decimals that do not fit decode to None
        self.digits = digits

    def options(self):
        if callable(self.choices):
            return self.choices()
        return [(choice, choice) for choice in (self.choices or [])]

    def decode(self, form):
        raw = form.get(self.name)
        if self.kind == 'bool':
            return raw == 'on'
        if raw is None:
            return None
        decoder = _DECODERS.get(self.kind)
        if decoder is None:
            return raw.strip()
        raw = raw.strip()
        if raw == '':
            return None
        try:
            value = decoder(raw)
            if self.kind == 'decimal' and self.digits:
                value = _fit_decimal(value, *self.digits)
            return value
        except (ValueError, InvalidOperation):
            return None

    def render_value(self, obj):
        """Value as the HTML input expects it."""
        value = getattr(obj, self.name, None) if obj is not None else None
        if value is None:
            return ''
        if self.kind == 'date' and isinstance(value, date):
            return value.strftime('%Y-%m-%d')
        if self.kind == 'datetime' and isinstance(value, datetime):
            return value.strftime('%Y-%m-%dT%H:%M')
        return value


def _parse_date(raw):
    return datetime.strptime(raw, '%Y-%m-%d').date()


def _parse_decimal(raw):
    value = Decimal(raw)
    if not value.is_finite():
        raise ValueError(raw)
    return value


def _fit_decimal(value, precision, scale):
    value = value.quantize(Decimal(1).scaleb(-scale))
    if abs(value) >= Decimal(10) ** (precision - scale):
        raise ValueError(value)
    return value


def _parse_datetime(raw):
    for fmt in ('%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d'):
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ValueError(raw)


_DECODERS = {
    'int': int,
    'fk': int,
    'decimal': _parse_decimal,
    'date': _parse_date,
    'datetime': _parse_datetime,
}


def decode_form(form, fields):
    """Decode every declared field; the result always has one key per field."""
    return {field.name: field.decode(form) for field in fields}
