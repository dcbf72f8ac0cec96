import logging
from collections import OrderedDict

from bindery.errors import (SchemaError,
                            UnknownOption,
                            MissingOptionValue,
                            PositionalUnderflow,
                            PositionalOverflow)
from bindery.values import BoolValue, ensure_value
from bindery.utils import (process_command_name,
                           process_slot_name,
                           normalize_long,
                           normalize_short,
                           is_option_token,
                           format_nonexp_repr)


log = logging.getLogger(__name__)

HELP_NAME = 'help'
VERSION_NAME = 'version'
HELP_FLAGS = ('-h', '--help')
VERSION_FLAGS = ('-V', '--version')


class Opt(object):
    """The Opt object represents a named input that is triggered by a
    short (``-p``) or long (``--port``) flag on the command line.

    Args:
       name (str): A name for the option, unique within its command.
       value: Where the parsed value is stored. Either a
          :class:`~bindery.values.Value` instance owned by the caller,
          or a shorthand: ``None`` for a string, ``True`` for a
          presence-only flag, or a callable such as ``int``.
       short (str): Short flag, e.g., ``'p'`` or ``'-p'``.
       long (str): Long flag, e.g., ``'port'`` or ``'--port'``. At
          least one of *short* and *long* is required.
       doc (str): A summary of the option's behavior, used in help
          output.
       optional (bool): Skip the required-ness check after
          parsing. Defaults to False, though an option whose value has
          a default is effectively optional either way.
    """
    def __init__(self, name, value=None, short=None, long=None, doc='', optional=False):
        self.name = process_slot_name(name)
        self.value = ensure_value(value)
        self.short = normalize_short(short)
        self.long = normalize_long(long)
        if self.short is None and self.long is None:
            raise SchemaError('option %r needs a short flag, a long flag, or both' % name)
        self.doc = doc or ''
        self.optional = bool(optional)

    @property
    def flags(self):
        return [f for f in (self.short, self.long) if f]

    def is_bool(self):
        return self.value.is_bool()

    def parse(self, token):
        self.value.parse(self.name, token)

    def check(self):
        self.value.check(self.name, kind='option')

    def __repr__(self):
        return format_nonexp_repr(self, ['name'], ['short', 'long', 'optional'],
                                  opt_key=lambda v: not v)


class Args(object):
    """Args describe a positional slot: a named input bound by its
    position among the tokens that are not options.

    Args:
       name (str): A name for the slot, unique among a command's
          positional slots.
       value: Where the parsed value is stored, as with :class:`Opt`.
       arity (int): How many tokens the slot takes. ``None`` (the
          default) makes the slot unbounded, taking however many
          tokens are left between the slots before it and the slots
          after it. A command may have at most one unbounded slot.
       optional (bool): Allow the slot to go unbound.
       doc (str): Used in help output.

    A slot with arity 1 binds a single converted value. Any other
    arity, including unbounded, binds a list.
    """
    def __init__(self, name, value=None, arity=None, optional=False, doc=''):
        self.name = process_slot_name(name)
        self.value = ensure_value(value)
        if self.value.is_bool():
            raise SchemaError('positional argument %r cannot be presence-only' % name)
        if arity is not None:
            if isinstance(arity, bool) or not isinstance(arity, int):
                raise SchemaError('expected int or None for arity, not: %r' % (arity,))
            if arity < 1:
                raise SchemaError('expected arity >= 1, not: %r' % arity)
        self.arity = arity
        self.optional = bool(optional)
        self.doc = doc or ''

    @property
    def is_unbounded(self):
        return self.arity is None

    @property
    def satisfied_without_tokens(self):
        return self.optional or self.value.has_default()

    def parse(self, tokens):
        tokens = list(tokens)
        if self.arity == 1 and len(tokens) == 1:
            self.value.parse(self.name, tokens[0])
        else:
            self.value.parse(self.name, tokens)

    def check(self):
        self.value.check(self.name, kind='argument')

    def __repr__(self):
        return format_nonexp_repr(self, ['name'], ['arity', 'optional'],
                                  opt_key=lambda v: v is None or v is False)


class Command(object):
    """A named group of options and positional slots. The App always has
    one unnamed main command, and may have any number of named
    subcommands, one level deep.

    Args:
       name (str): The token which selects this command on the command
          line. ``None`` only for the main command, which the App
          creates.
       doc (str): A description used in help output.
       opts (list): Opt instances, also addable with :meth:`add`.
       args (list): Args instances, in positional order, also addable
          with :meth:`add`.
       allow_zero_args (bool): Whether an invocation with no tokens for
          this command is acceptable. Defaults to True.
       version (str): Pass a version string to give this command its
          own ``-V/--version`` flag.
    """
    def __init__(self, name, doc='', opts=None, args=None,
                 allow_zero_args=True, version=None):
        self.name = process_command_name(name) if name is not None else None
        self.doc = doc or ''
        self.allow_zero_args = allow_zero_args
        self.version = version

        self.opts = OrderedDict()
        self.flag_map = OrderedDict()  # '-p'/'--port' to option name
        self.args = []
        self.reserved = []  # the help and version Opts

        self.reserved.append(self.add(Opt(HELP_NAME, BoolValue(), short='h', long='help',
                                          doc='show this help message and exit',
                                          optional=True)))
        if version is not None:
            self._add_version()

        for opt in opts or []:
            self.add(opt)
        for args_ in args or []:
            self.add(args_)

    def _add_version(self):
        self.reserved.append(self.add(Opt(VERSION_NAME, BoolValue(), short='V', long='version',
                                          doc='show the version message and exit',
                                          optional=True)))

    @property
    def has_version(self):
        return any(opt.name == VERSION_NAME for opt in self.reserved)

    def add(self, target):
        """Add an :class:`Opt` or :class:`Args` to this command, returning
        it.

        Raises SchemaError on duplicate option names or flags,
        duplicate positional names, or a second unbounded positional
        slot.
        """
        if isinstance(target, Opt):
            self._add_opt(target)
        elif isinstance(target, Args):
            self._add_args(target)
        else:
            raise SchemaError('expected Opt or Args instance, not: %r' % (target,))
        return target

    def _add_opt(self, opt):
        if opt.name in self.opts:
            raise SchemaError('option name %r already defined' % opt.name)
        for flag in opt.flags:
            if flag in self.flag_map:
                raise SchemaError('option flag %r already defined by option %r'
                                  % (flag, self.flag_map[flag]))
        for flag in opt.flags:
            self.flag_map[flag] = opt.name
        self.opts[opt.name] = opt

    def _add_args(self, args_):
        for existing in self.args:
            if existing.name == args_.name:
                raise SchemaError('argument name %r already defined' % args_.name)
            if existing.is_unbounded and args_.is_unbounded:
                raise SchemaError('argument %r cannot be unbounded, %r already is'
                                  % (args_.name, existing.name))
        self.args.append(args_)

    def get_opt(self, flag):
        "Look up an Opt by its exact flag text, e.g., ``'--port'``."
        try:
            return self.opts[self.flag_map[flag]]
        except KeyError:
            return None

    def parse_tokens(self, tokens):
        """Scan *tokens* for options, then distribute the remainder to
        positional slots. Values are bound as they are matched; the
        first error aborts.
        """
        posargs = scan_tokens(self, list(tokens))
        distribute_posargs(self.args, posargs)

    def check(self):
        check_command(self)

    def __repr__(self):
        return format_nonexp_repr(self, ['name'], ['doc'], opt_key=lambda v: not v)


def scan_tokens(cmd, tokens):
    """Walk *tokens* once, binding every option token (and its value
    token, if the option takes one) into the matching Opt. Returns
    the tokens which are not options, in their original order.
    """
    posargs = []
    i, len_tokens = 0, len(tokens)
    while i < len_tokens:
        token = tokens[i]
        if not is_option_token(token):
            posargs.append(token)
            i += 1
            continue
        opt = cmd.get_opt(token)
        if opt is None:
            raise UnknownOption.from_parse(cmd, token)
        if opt.is_bool():
            opt.parse('')
            i += 1
        elif i + 1 < len_tokens:
            log.debug('binding option %s to %r', token, tokens[i + 1])
            opt.parse(tokens[i + 1])
            i += 2
        else:
            raise MissingOptionValue.from_parse(token)
    return posargs


def distribute_posargs(args, tokens):
    """Assign contiguous blocks of *tokens* to the positional slots in
    *args*, binding each slot's value.

    Fixed-arity slots before the unbounded slot take tokens from the
    front, fixed-arity slots after it take tokens from the back, and
    the unbounded slot takes whatever is left between the two
    cursors. Without an unbounded slot, leftover tokens are an error.
    """
    tokens = list(tokens)
    _check_posarg_count(args, tokens)

    unbounded_idx = None
    for i, args_ in enumerate(args):
        if args_.is_unbounded:
            unbounded_idx = i
            break

    if unbounded_idx is None:
        head, tail = list(args), []
    else:
        head, tail = args[:unbounded_idx], args[unbounded_idx + 1:]

    lo, hi = 0, len(tokens)
    for args_ in head:
        lo, hi = _assign_fixed(args_, tokens, lo, hi, from_back=False)
    for args_ in reversed(tail):
        lo, hi = _assign_fixed(args_, tokens, lo, hi, from_back=True)

    if unbounded_idx is None:
        if lo < hi:
            raise PositionalOverflow.from_parse(tokens[lo:hi])
        return

    unbounded = args[unbounded_idx]
    if lo < hi:
        log.debug('binding unbounded argument <%s> to %r', unbounded.name, tokens[lo:hi])
        unbounded.parse(tokens[lo:hi])
    elif not unbounded.satisfied_without_tokens:
        raise PositionalUnderflow.no_provide(unbounded.name)
    return


def _check_posarg_count(args, tokens):
    # required slots without defaults need at least their arity (one
    # token for an unbounded slot), counted in positional order
    used, len_tokens = 0, len(tokens)
    for args_ in args:
        if args_.satisfied_without_tokens:
            continue
        needed = args_.arity or 1
        if used == len_tokens:
            raise PositionalUnderflow.no_provide(args_.name)
        if used + needed > len_tokens:
            raise PositionalUnderflow.no_provide_enough(args_.name, tokens[used:])
        used += needed


def _assign_fixed(args_, tokens, lo, hi, from_back):
    remaining = hi - lo
    arity = args_.arity
    if arity <= remaining:
        if from_back:
            block, hi = tokens[hi - arity:hi], hi - arity
        else:
            block, lo = tokens[lo:lo + arity], lo + arity
        log.debug('binding argument <%s> to %r', args_.name, block)
        args_.parse(block)
    elif remaining == 0:
        if not args_.satisfied_without_tokens:
            raise PositionalUnderflow.no_provide(args_.name)
    elif args_.optional:
        # a short optional slot takes everything that is left
        log.debug('binding optional argument <%s> to %r', args_.name, tokens[lo:hi])
        args_.parse(tokens[lo:hi])
        lo = hi
    else:
        raise PositionalUnderflow.no_provide_enough(args_.name, tokens[lo:hi])
    return lo, hi


def check_command(cmd):
    """Post-parse validation: every option and positional slot not
    marked optional must hold a parsed value or a default.
    """
    for opt in cmd.opts.values():
        if not opt.optional:
            opt.check()
    for args_ in cmd.args:
        if not args_.optional:
            args_.check()
    return


class ParseState(object):
    """Per-parse bookkeeping for the dispatcher. Lives only for the
    duration of one App.parse() call.
    """
    def __init__(self, argv, subcmd_idx=None, subcmd=None):
        self.argv = list(argv)
        self.subcmd_idx = subcmd_idx
        self.subcmd = subcmd
        self.help_requested = False
        self.version_requested = False

    @property
    def main_tokens(self):
        if self.subcmd_idx is None:
            return self.argv
        return self.argv[:self.subcmd_idx]

    @property
    def subcmd_tokens(self):
        if self.subcmd_idx is None:
            return []
        return self.argv[self.subcmd_idx + 1:]


class ParseContext(object):
    """The result of :meth:`App.parse`. Carries the App's metadata,
    which command was selected, whether help or version output was
    requested instead of a normal parse, the environment facts used
    by help rendering, and the bound values.

    Args:
       app: The App that produced this result.
       subcmd (str): Name of the selected subcommand, or None for the
          main command.
       argv (list): The tokens that were parsed.
       help_requested (bool): ``-h/--help`` short-circuited parsing.
       version_requested (bool): ``-V/--version`` short-circuited
          parsing.
       values (OrderedDict): Mapping of slot names to bound values, main
          command first, then the selected subcommand. Empty when
          parsing was short-circuited.
       env (dict): Environment facts, see
          :func:`bindery.utils.get_env_facts`.
    """
    def __init__(self, app, subcmd, argv, help_requested=False,
                 version_requested=False, values=None, env=None):
        self.app = app
        self.name = app.name
        self.version = app.version
        self.doc = app.doc
        self.authors = list(app.authors)
        self.addrs = list(app.addrs)
        self.subcmd = subcmd
        self.argv = tuple(argv)
        self.help_requested = help_requested
        self.version_requested = version_requested
        self.values = OrderedDict(values or ())
        env = env or {}
        self.current_exe = env.get('current_exe')
        self.current_dir = env.get('current_dir')
        self.home_dir = env.get('home_dir')
        self.temp_dir = env.get('temp_dir')

    @property
    def command(self):
        return self.app.get_command(self.subcmd)

    def __getitem__(self, name):
        return self.values[name]

    def __repr__(self):
        return format_nonexp_repr(self, ['name', 'subcmd'],
                                  ['help_requested', 'version_requested'],
                                  opt_key=lambda v: not v)
