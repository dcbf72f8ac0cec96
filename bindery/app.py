import sys
import logging
from collections import OrderedDict

from bindery.errors import (SchemaError,
                            ArgumentParseError,
                            ZeroArgsError,
                            CommandLineError)
from bindery.parser import (Opt,
                            Args,
                            Command,
                            ParseState,
                            ParseContext,
                            HELP_FLAGS,
                            VERSION_FLAGS)
from bindery.helpers import HelpHandler
from bindery.utils import get_env_facts, format_nonexp_repr


log = logging.getLogger(__name__)


def default_print_error(msg):
    return sys.stderr.write(msg + '\n')


DEFAULT_HELP_HANDLER = HelpHandler()


def _first_index(argv, targets):
    for i, arg in enumerate(argv):
        if arg in targets:
            return i
    return None


class App(object):
    """The top of the schema: application metadata, the unnamed main
    command, and any number of named subcommands. Build it up with
    :meth:`add`, then call :meth:`run` (or :meth:`parse`, for the
    programmatic interface).

    Args:
       name (str): The application name, shown in help and version
          output.
       version (str): Shown by ``-V/--version``.
       doc (str): A description of the application.
       authors (list): Pairs of ``(name, email)``.
       addrs (list): Pairs of ``(label, url)``, e.g., a homepage or
          issue tracker.
       allow_zero_args (bool): Whether running with no arguments at all
          is acceptable. Defaults to True.
       help: A :class:`~bindery.helpers.HelpHandler` instance, used to
          render help, version, and error output in :meth:`run`.
    """
    def __init__(self, name, version='', doc='', authors=None, addrs=None,
                 allow_zero_args=True, help=None):
        if not name or not isinstance(name, str):
            raise SchemaError('expected non-zero length string for app name, not: %r' % (name,))
        self.name = name
        self.version = version or ''
        self.doc = doc or ''
        self.authors = []
        self.addrs = []
        for author, email in authors or ():
            self.add_author(author, email)
        for label, url in addrs or ():
            self.add_addr(label, url)

        self.main = Command(None, doc=self.doc, allow_zero_args=allow_zero_args,
                            version=self.version)
        self.subcmds = OrderedDict()
        self.help_handler = help if help is not None else DEFAULT_HELP_HANDLER

    @property
    def allow_zero_args(self):
        return self.main.allow_zero_args

    @allow_zero_args.setter
    def allow_zero_args(self, allow):
        self.main.allow_zero_args = allow

    def add_author(self, name, email=''):
        self.authors.append((name, email))

    def add_addr(self, label, url):
        self.addrs.append((label, url))

    def add(self, target):
        """Add an :class:`Opt` or :class:`Args` to the main command, or a
        :class:`Command` as a subcommand. Returns the added object.

        Raises SchemaError on conflicts, see :meth:`Command.add`.
        """
        if isinstance(target, Command):
            return self.add_command(target)
        if isinstance(target, (Opt, Args)):
            return self.main.add(target)
        raise SchemaError('expected Opt, Args, or Command instance, not: %r' % (target,))

    def add_command(self, subcmd):
        if not isinstance(subcmd, Command):
            raise SchemaError('expected Command instance, not: %r' % (subcmd,))
        if subcmd.name is None:
            raise SchemaError('subcommands must be named')
        if subcmd.name in self.subcmds:
            raise SchemaError('conflicting subcommand name: %r' % subcmd.name)
        self.subcmds[subcmd.name] = subcmd
        return subcmd

    def get_command(self, name=None):
        if name is None:
            return self.main
        return self.subcmds[name]

    def parse(self, argv):
        """Bind a list of strings (not including the program name) into
        the App's values, returning a :class:`ParseContext`.

        The first token exactly matching a subcommand name splits
        *argv*: tokens before it go to the main command, tokens after
        it go to the subcommand. ``-h/--help`` and ``-V/--version``
        short-circuit parsing; the returned context reports which was
        requested and for which command, and no values are bound.

        Raises ArgumentParseError (or one of its subtypes) if the
        arguments fail to parse, with ``.command`` set to the command
        active at the time.
        """
        if isinstance(argv, str):
            raise TypeError('expected list of arguments, not string: %r' % argv)
        argv = list(argv)
        log.debug('args: %r', argv)

        subcmd_idx, subcmd = None, None
        for i, arg in enumerate(argv):
            if arg in self.subcmds:
                subcmd_idx, subcmd = i, arg
                break

        state = ParseState(argv, subcmd_idx=subcmd_idx, subcmd=subcmd)
        env = get_env_facts()

        cmds = list(self._iter_commands(state))
        for cmd in cmds:
            for slot in list(cmd.opts.values()) + cmd.args:
                slot.value.reset()

        scope = self._resolve_short_circuit(state)
        if state.help_requested or state.version_requested:
            return ParseContext(self, scope, argv,
                                help_requested=state.help_requested,
                                version_requested=state.version_requested,
                                env=env)

        active = self.main
        try:
            if not argv and not self.main.allow_zero_args:
                msg = 'option/command missing' if self.subcmds else 'option missing'
                raise ZeroArgsError(msg)
            for cmd, tokens in zip(cmds, (state.main_tokens, state.subcmd_tokens)):
                active = cmd
                if cmd is not self.main and not cmd.allow_zero_args and not tokens:
                    raise ZeroArgsError('option missing')
                cmd.parse_tokens(tokens)
            for cmd in cmds:
                active = cmd
                cmd.check()
        except ArgumentParseError as ape:
            ape.command = active
            raise

        return ParseContext(self, subcmd, argv,
                            values=self._get_values(state), env=env)

    def _resolve_short_circuit(self, state):
        """Set the help/version fields of *state* and return the name of
        the command they apply to (None for main).
        """
        split_idx = state.subcmd_idx
        help_idx = _first_index(state.argv, HELP_FLAGS)
        if help_idx is not None:
            state.help_requested = True
            if split_idx is not None and split_idx < help_idx:
                return state.subcmd
            return None

        version_idx = _first_index(state.argv, VERSION_FLAGS)
        if version_idx is None:
            return None
        if split_idx is None or version_idx < split_idx:
            state.version_requested = True
            return None
        if self.subcmds[state.subcmd].has_version:
            state.version_requested = True
            return state.subcmd
        # otherwise the subcommand reports it as an unknown option
        return None

    def _iter_commands(self, state):
        yield self.main
        if state.subcmd is not None:
            yield self.subcmds[state.subcmd]

    def _get_values(self, state):
        ret = OrderedDict()
        for cmd in self._iter_commands(state):
            for name, opt in cmd.opts.items():
                if opt in cmd.reserved:
                    continue
                ret[name] = opt.value.value
            for args_ in cmd.args:
                ret[args_.name] = args_.value.value
        return ret

    def run(self, argv=None, print_error=None):
        """Parses arguments, handling help, version, and errors the
        conventional way. Returns the :class:`ParseContext` on success.

        Help and version requests print to stdout and exit with status
        code 0. If there is a parse error due to invalid user input,
        the error is printed along with the active command's usage, and
        a CommandLineError is raised. If not caught, a CommandLineError
        will exit the process with status code 1.

        Args:
           argv (list): A sequence of strings, not including the program
              name. Defaults to ``sys.argv[1:]``.
           print_error (callable): The function that prints error
              messages before exiting. Pass False to print nothing.
        """
        if print_error is None or print_error is True:
            print_error = default_print_error
        elif print_error and not callable(print_error):
            raise TypeError('expected callable for print_error, not %r'
                            % print_error)
        if argv is None:
            argv = sys.argv[1:]

        try:
            ctx = self.parse(argv)
        except ArgumentParseError as ape:
            msg = self.help_handler.get_error_text(self, ape)
            if print_error:
                print_error(msg)
            raise CommandLineError(msg)

        if ctx.help_requested:
            print(self.help_handler.get_help_text(self, subcmd=ctx.subcmd), end='')
            sys.exit(0)
        if ctx.version_requested:
            print(self.help_handler.get_version_text(self, subcmd=ctx.subcmd))
            sys.exit(0)
        return ctx

    def __repr__(self):
        return format_nonexp_repr(self, ['name'], ['version'], opt_key=lambda v: not v)
