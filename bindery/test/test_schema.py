
import pytest

from bindery import (App,
                     Command,
                     Opt,
                     Args,
                     Value,
                     BoolValue,
                     SchemaError)
from bindery.values import ensure_value
from bindery.utils import (format_opt_label,
                           format_args_label,
                           get_cardinalized_args_label)


def test_cmd_name():
    Command('ok_cmd')

    name_err_map = {'': 'non-zero length string',
                    5: 'non-zero length string',
                    'name_': 'without trailing dashes or underscores',
                    'name--': 'without trailing dashes or underscores',
                    'n?me': ('valid subcommand name must begin with a letter, and'
                             ' consist only of letters, digits, underscores, and'
                             ' dashes')}

    for name, err in name_err_map.items():
        with pytest.raises(ValueError, match=err):
            Command(name)

    return


def test_opt_flags():
    opt = Opt('port', int, short='-p', long='port')
    assert opt.flags == ['-p', '--port']
    assert format_opt_label(opt) == '-p, --port <port>'
    assert format_opt_label(Opt('verbose', True, long='--verbose')) == '--verbose'
    assert format_opt_label(Opt('charset', short='cs')) == '-cs <charset>'

    with pytest.raises(SchemaError, match='short flag, a long flag, or both'):
        Opt('orphan')

    flag_err_map = {'--': 'valid long flags',
                    'bad flag': 'valid long flags',
                    '1st': 'valid long flags'}
    for long, err in flag_err_map.items():
        with pytest.raises(SchemaError, match=err):
            Opt('x', long=long)

    for short in ('-', '--x', 'a b'):
        with pytest.raises(SchemaError, match='short flag characters'):
            Opt('x', short=short)


def test_opt_conflicts():
    cmd = Command('cmd')
    cmd.add(Opt('output', short='o', long='output'))

    with pytest.raises(SchemaError, match='option name .* already defined'):
        cmd.add(Opt('output', long='out'))
    with pytest.raises(SchemaError, match="'--output' already defined"):
        cmd.add(Opt('out', long='output'))
    with pytest.raises(SchemaError, match="'-o' already defined"):
        cmd.add(Opt('other', short='o'))
    with pytest.raises(SchemaError, match="'-h' already defined by option 'help'"):
        cmd.add(Opt('host', short='h'))

    # a failed add leaves no partial registration behind
    cmd.add(Opt('other', long='other'))
    assert cmd.get_opt('--other').name == 'other'
    assert cmd.get_opt('--nope') is None


def test_version_flag_is_reserved_on_main():
    app = App('app')
    with pytest.raises(SchemaError):
        app.add(Opt('verbose', True, short='V'))

    sub = Command('sub')
    sub.add(Opt('verbose', True, short='V'))
    assert not sub.has_version
    assert Command('sub', version='1.0').has_version


def test_args_schema():
    cmd = Command('cmd')
    cmd.add(Args('rest'))

    with pytest.raises(SchemaError, match='cannot be unbounded'):
        cmd.add(Args('more'))
    with pytest.raises(SchemaError, match='already defined'):
        cmd.add(Args('rest', arity=1))

    for arity in (0, -1, True, '2'):
        with pytest.raises(SchemaError):
            Args('bad', arity=arity)

    with pytest.raises(SchemaError, match='presence-only'):
        Args('flag', BoolValue())


def test_add_rejects_other_types():
    with pytest.raises(SchemaError):
        Command('cmd').add('--flag')
    with pytest.raises(SchemaError):
        App('app').add(object())


def test_subcmd_conflicts():
    app = App('app')
    app.add(Command('build'))
    with pytest.raises(SchemaError, match='conflicting subcommand name'):
        app.add(Command('build'))
    with pytest.raises(SchemaError, match='must be named'):
        app.add_command(Command(None))


def test_ensure_value():
    assert isinstance(ensure_value(None), Value)
    assert ensure_value(True).is_bool()
    assert ensure_value(bool).is_bool()
    assert ensure_value(int).parse_as is int
    val = Value(float)
    assert ensure_value(val) is val
    with pytest.raises(SchemaError):
        ensure_value('int')


def test_args_labels():
    assert get_cardinalized_args_label('file', 1, None) == '<file> [<files> ...]'
    assert get_cardinalized_args_label('file', 0, None) == '[<files> ...]'
    assert get_cardinalized_args_label('file', 0, 1) == '[<file>]'
    assert get_cardinalized_args_label('file', 2, 2) == '<file> <file>'

    assert format_args_label(Args('src', arity=1)) == '<src>'
    assert format_args_label(Args('pair', arity=2, optional=True)) == '[<pair> <pair>]'
    assert format_args_label(Args('rest')) == '<rest> [<rests> ...]'
    assert format_args_label(Args('rest', optional=True)) == '[<rests> ...]'
