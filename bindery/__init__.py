
from bindery.parser import (Opt,
                            Args,
                            Command,
                            ParseContext,
                            scan_tokens,
                            distribute_posargs,
                            check_command)

from bindery.errors import (BinderyException,
                            SchemaError,
                            ArgumentParseError,
                            UnknownOption,
                            MissingOptionValue,
                            InvalidValue,
                            PositionalUnderflow,
                            PositionalOverflow,
                            MissingRequired,
                            ZeroArgsError,
                            CommandLineError)

from bindery.values import Value, BoolValue, ChoicesValue, NOT_SET
from bindery.app import App
from bindery.helpers import HelpHandler
