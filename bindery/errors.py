
class BinderyException(Exception):
    """The basest base exception bindery has. Rarely directly
    instantiated if ever, but useful for catching.
    """
    pass


class SchemaError(BinderyException, ValueError):
    """Raised while building an App or Command, when the schema itself
    is invalid: duplicate names or flags, an option with neither short
    nor long form, more than one unbounded positional slot, and so
    on. These are programming errors, not bad user input.
    """
    pass


class ArgumentParseError(BinderyException):
    """A base exception used for all errors raised during argument
    parsing.

    *name* is the offending option flag, positional slot name, or
    token. After dispatch, the App sets *command* to the Command
    active when the error occurred, so that the error can be printed
    alongside that command's usage.
    """
    def __init__(self, msg, name=None):
        super(ArgumentParseError, self).__init__(msg)
        self.name = name
        self.command = None

    @property
    def message(self):
        try:
            return self.args[0]
        except IndexError:
            return ''


class UnknownOption(ArgumentParseError):
    """
    Raised when a token looks like an option but matches no flag.
    """
    @classmethod
    def from_parse(cls, cmd, token):
        valid = ', '.join(sorted(cmd.flag_map))
        msg = 'option "%s" not defined, choose from: %s' % (token, valid)
        return cls(msg, name=token)


class MissingOptionValue(ArgumentParseError):
    """
    Raised when a value-taking option is the last token.
    """
    @classmethod
    def from_parse(cls, token):
        return cls('option %s\'s value missing' % token, name=token)


class InvalidValue(ArgumentParseError):
    """Raised when a Value fails to convert a token, e.g., an int option
    given "abc".
    """
    @classmethod
    def from_parse(cls, name, token, exc=None):
        msg = '%s expected a valid value, not %r' % (name, token)
        if exc is not None:
            msg += ' (got error: %r)' % exc
        if token.startswith('-'):
            msg += '. (Did you forget to pass an argument?)'
        return cls(msg, name=name)


class PositionalUnderflow(ArgumentParseError):
    """Raised when a positional slot cannot be satisfied by the tokens
    that remain.
    """
    @classmethod
    def no_provide(cls, name):
        return cls('argument <%s> not provided' % name, name=name)

    @classmethod
    def no_provide_enough(cls, name, tokens):
        return cls('argument <%s> not provided enough values: %r'
                   % (name, list(tokens)), name=name)


class PositionalOverflow(ArgumentParseError):
    """Raised when tokens remain after every positional slot is
    satisfied.
    """
    @classmethod
    def from_parse(cls, tokens):
        tokens = list(tokens)
        return cls('unexpected positional arguments: %r' % tokens,
                   name=tokens[0] if tokens else None)


class MissingRequired(ArgumentParseError):
    """Raised by post-parse validation when a required option or
    positional argument was never bound and has no default. *kind* is
    either ``'option'`` or ``'argument'``.
    """
    def __init__(self, msg, name=None, kind=None):
        super(MissingRequired, self).__init__(msg, name=name)
        self.kind = kind

    @classmethod
    def from_parse(cls, name, kind):
        return cls('missing required %s: %s' % (kind, name), name=name, kind=kind)


class ZeroArgsError(ArgumentParseError):
    """Raised when a command that does not allow empty invocation
    receives no tokens.
    """
    pass


class CommandLineError(BinderyException, SystemExit):
    def __init__(self, msg, code=1):
        SystemExit.__init__(self, msg)
        self.code = code
