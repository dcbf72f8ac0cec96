import os
import re
import sys
import tempfile

from boltons.strutils import pluralize, singularize
from boltons.iterutils import unique

from bindery.errors import SchemaError


# keep it just to subset of valid ASCII identifiers for now
VALID_NAME_RE = re.compile(r"^[A-Za-z][-_A-Za-z0-9]*\Z")

_VALID_SHORT_CHARS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!*+./?@_'


def process_command_name(name):
    """Validate a Command's name, generally on construction. Only
    letters, numbers, '-', and/or '_'. Must begin with a letter, and no
    trailing underscores or dashes.

    Unlike flags, the name is not normalized, as subcommands are
    matched against tokens exactly.
    """
    if not name or not isinstance(name, str):
        raise SchemaError('expected non-zero length string for subcommand name, not: %r' % (name,))

    if name.endswith('-') or name.endswith('_'):
        raise SchemaError('expected subcommand name without trailing dashes'
                          ' or underscores, not: %r' % name)

    if not VALID_NAME_RE.match(name):
        raise SchemaError('valid subcommand name must begin with a letter, and'
                          ' consist only of letters, digits, underscores, and'
                          ' dashes, not: %r' % name)
    return name


def process_slot_name(name):
    if not name or not isinstance(name, str):
        raise SchemaError('expected non-zero length string for name, not: %r' % (name,))
    if any(c.isspace() for c in name):
        raise SchemaError('expected name without whitespace, not: %r' % name)
    return name


def normalize_long(long):
    """Turn ``'port'`` or ``'--port'`` into ``'--port'``, validating along
    the way."""
    if long is None:
        return None
    if not isinstance(long, str):
        raise SchemaError('expected string for long flag, not: %r' % (long,))
    orig_long = long
    if long[:2] == '--':
        long = long[2:]
    if not VALID_NAME_RE.match(long):
        raise SchemaError('valid long flags must begin with a letter, optionally'
                          ' prefixed by two dashes, and consist only of letters,'
                          ' digits, underscores, and dashes, not: %r' % orig_long)
    return '--' + long


def normalize_short(short):
    """Turn ``'p'`` or ``'-p'`` into ``'-p'``. Short flags are usually a
    single character, but multi-character short forms like ``-cs``
    are accepted."""
    if short is None:
        return None
    if not isinstance(short, str):
        raise SchemaError('expected string for short flag, not: %r' % (short,))
    orig_short = short
    if short[:1] == '-' and len(short) > 1:
        short = short[1:]
    if not short or short[0] == '-' or any(c not in _VALID_SHORT_CHARS for c in short):
        raise SchemaError('expected valid short flag characters (ASCII letters,'
                          ' numbers, or shell-compatible punctuation), optionally'
                          ' prefixed by a dash, not: %r' % orig_short)
    return '-' + short


def is_option_token(token):
    "Whether the scanner treats *token* as an option rather than a positional."
    if token.startswith('--'):
        return token != '--'
    return token.startswith('-') and token != '-'


def format_opt_label(opt):
    "The default option label formatter, used in help and error formatting"
    parts = [f for f in (opt.short, opt.long) if f]
    ret = ', '.join(parts)
    if not opt.value.is_bool():
        ret += ' <%s>' % opt.name
    return ret


def format_args_label(args):
    "The default positional argument label formatter, used in help formatting"
    if args.arity is None:
        min_count = 0 if args.optional or args.value.has_default() else 1
        label = get_cardinalized_args_label(args.name, min_count, None)
    else:
        label = ' '.join(['<%s>' % args.name] * args.arity)
        if args.optional or args.value.has_default():
            label = '[%s]' % label
    return label


def get_cardinalized_args_label(name, min_count, max_count):
    '''
    Examples for parameter values: (min_count, max_count): output for name=arg:

      1, 1: <arg>
      0, 1: [<arg>]
      0, None: [<args> ...]
      1, None: <arg> [<args> ...]

    The name may be given in either singular or plural form.
    '''
    if min_count == max_count:
        return ' '.join(['<%s>' % name] * min_count)
    if min_count == 1:
        return '<%s> ' % singularize(name) + get_cardinalized_args_label(
            name, min_count=0, max_count=max_count - 1 if max_count is not None else None)

    tmpl = '[%s]' if min_count == 0 else '%s'
    if max_count == 1:
        return tmpl % ('<%s>' % singularize(name))
    return tmpl % ('<%s> ...' % pluralize(singularize(name)))


def format_slot_post_doc(slot):
    "Parenthetical appended to an option or argument's doc in help output"
    if slot.optional:
        return '(optional)'
    value = slot.value
    if value.is_bool() or not value.has_default():
        return ''
    default = value.default
    if default is None or repr(default) == object.__repr__(default):
        # avoid displaying unhelpful defaults
        return ''
    return '(defaults to %r)' % (default,)


def unwrap_text(text):
    all_grafs = []
    cur_graf = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            cur_graf.append(line)
        else:
            all_grafs.append(' '.join(cur_graf))
            cur_graf = []
    if cur_graf:
        all_grafs.append(' '.join(cur_graf))
    return '\n'.join(all_grafs)


def get_env_facts():
    """Collect the environment facts exposed on ParseContext. Each
    lookup is independent; one that fails is reported as None.
    """
    try:
        current_dir = os.getcwd()
    except OSError:
        current_dir = None
    home_dir = os.path.expanduser('~')
    if home_dir == '~':
        home_dir = None
    exe = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    current_exe = os.path.abspath(exe) if exe else None
    return {'current_exe': current_exe,
            'current_dir': current_dir,
            'home_dir': home_dir,
            'temp_dir': tempfile.gettempdir()}


def format_nonexp_repr(obj, req_names=None, opt_names=None, opt_key=None):
    """Format a non-expression-style repr

    Some object reprs look like object instantiation, e.g., App(r=[], mw=[]).

    This makes sense for smaller, lower-level objects whose state
    roundtrips. But a lot of objects contain values that don't
    roundtrip, like types and functions.

    For those objects, there is the non-expression style repr, which
    mimic's Python's default style to make a repr like this:

    <Opt name='port' short='-p'>
    """
    cn = obj.__class__.__name__
    req_names = req_names or []
    opt_names = opt_names or []
    all_names = unique(req_names + opt_names)

    if opt_key is None:
        opt_key = lambda v: v is None
    assert callable(opt_key)

    items = [(name, getattr(obj, name, None)) for name in all_names]
    labels = ['%s=%r' % (name, val) for name, val in items
              if not (name in opt_names and opt_key(val))]
    if not labels:
        labels = ['id=%s' % id(obj)]
    ret = '<%s %s>' % (cn, ' '.join(labels))
    return ret
