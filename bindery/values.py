"""Values are the storage half of every option and positional slot.

A Value is created by the caller, handed to an Opt or Args, and read
back after parsing::

  port = Value(int, default=8080)
  app.add(Opt('port', port, short='p', long='port'))
  app.parse(['--port', '9000'])
  port.value  # 9000

Each Value is written only by its own slot, at most once per
occurrence of that slot on the command line.
"""

from boltons.typeutils import make_sentinel

from bindery.errors import SchemaError, InvalidValue, MissingRequired
from bindery.utils import format_nonexp_repr


NOT_SET = make_sentinel('NOT_SET')


class Value(object):
    """Caller-owned storage for a single option or positional slot.

    Args:
       parse_as (callable): Called with each raw token, the return
          value of which is stored. Defaults to ``str``.
       default: The value reported when nothing was bound. Leave as
          ``NOT_SET`` to make the owning slot required (unless the
          slot itself is marked optional).
    """
    def __init__(self, parse_as=str, default=NOT_SET):
        if not callable(parse_as):
            raise SchemaError('expected callable for parse_as, not: %r' % (parse_as,))
        self.parse_as = parse_as
        self.default = default
        self.reset()

    def reset(self):
        self._value = NOT_SET

    @property
    def is_set(self):
        return self._value is not NOT_SET

    @property
    def value(self):
        if self._value is not NOT_SET:
            return self._value
        if self.default is not NOT_SET:
            return self.default
        return None

    def is_bool(self):
        return False

    def has_default(self):
        return self.default is not NOT_SET

    def convert(self, name, token):
        try:
            return self.parse_as(token)
        except Exception as exc:
            raise InvalidValue.from_parse(name, token, exc)

    def parse(self, name, raw):
        """Convert and store *raw*, which is either a single token or a
        list of tokens (for multi-token positional slots).

        Raises InvalidValue if a token fails to convert.
        """
        if isinstance(raw, (list, tuple)):
            self._value = [self.convert(name, token) for token in raw]
        else:
            self._value = self.convert(name, raw)
        return

    def check(self, name, kind='option'):
        if self.is_set or self.has_default():
            return
        raise MissingRequired.from_parse(name, kind)

    def __repr__(self):
        return format_nonexp_repr(self, ['parse_as'], ['default', 'value'],
                                  opt_key=lambda v: v is NOT_SET or v is None)


class BoolValue(Value):
    """A presence-only value. Options holding a BoolValue consume no
    token, and their presence stores ``True``.
    """
    def __init__(self, default=False):
        super(BoolValue, self).__init__(parse_as=bool, default=default)

    def is_bool(self):
        return True

    def parse(self, name, raw=''):
        self._value = True


class ChoicesValue(Value):
    """Stores a single value, limited to a set of *choices*. The actual
    converter used to parse is inferred from *choices* by default, but
    an explicit one can be set with *parse_as*.
    """
    def __init__(self, choices, parse_as=None, default=NOT_SET):
        if not choices:
            raise SchemaError('expected at least one choice, not: %r' % (choices,))
        try:
            self.choices = sorted(choices)
        except Exception:
            # in case choices aren't sortable
            self.choices = list(choices)
        if parse_as is None:
            parse_as = type(self.choices[0])
        super(ChoicesValue, self).__init__(parse_as=parse_as, default=default)

    def convert(self, name, token):
        choice = super(ChoicesValue, self).convert(name, token)
        if choice not in self.choices:
            raise InvalidValue('%s expected one of %r, not: %r'
                               % (name, self.choices, token), name=name)
        return choice


def ensure_value(value):
    """Turn the shorthand accepted by Opt and Args into a Value
    instance. ``None`` is a required string, ``True`` or ``bool`` is a
    presence-only flag, any other callable is a required value parsed
    with that callable.
    """
    if value is None:
        return Value()
    if isinstance(value, Value):
        return value
    if value is True or value is bool:
        return BoolValue()
    if callable(value):
        return Value(parse_as=value)
    raise SchemaError('expected Value instance, True, or callable, not: %r' % (value,))
