
import pytest

from bindery import (Command,
                     Opt,
                     Args,
                     Value,
                     ChoicesValue,
                     scan_tokens,
                     check_command,
                     UnknownOption,
                     MissingOptionValue,
                     MissingRequired,
                     InvalidValue)


@pytest.fixture
def serve_cmd():
    cmd = Command('serve')
    cmd.add(Opt('port', Value(int, default=8080), short='p', long='port'))
    cmd.add(Opt('verbose', True, short='v', long='verbose'))
    return cmd


def test_scan_binds_options_and_collects_posargs(serve_cmd):
    posargs = scan_tokens(serve_cmd, ['a', '--port', '80', 'b', '-v', 'c'])

    assert posargs == ['a', 'b', 'c']
    assert serve_cmd.opts['port'].value.value == 80
    assert serve_cmd.opts['verbose'].value.value is True


def test_scan_defaults_untouched(serve_cmd):
    assert scan_tokens(serve_cmd, []) == []
    assert serve_cmd.opts['port'].value.value == 8080
    assert not serve_cmd.opts['port'].value.is_set
    assert serve_cmd.opts['verbose'].value.value is False


def test_dashes_are_positional(serve_cmd):
    assert scan_tokens(serve_cmd, ['-', '--', 'x']) == ['-', '--', 'x']


def test_option_value_may_look_like_an_option(serve_cmd):
    scan_tokens(serve_cmd, ['--port', '-5'])
    assert serve_cmd.opts['port'].value.value == -5


def test_repeated_option_last_wins(serve_cmd):
    scan_tokens(serve_cmd, ['-p', '1', '--port', '2'])
    assert serve_cmd.opts['port'].value.value == 2


def test_missing_option_value(serve_cmd):
    with pytest.raises(MissingOptionValue, match='--port') as exc_info:
        scan_tokens(serve_cmd, ['--port'])
    assert exc_info.value.name == '--port'


@pytest.mark.parametrize('tokens', [['--bogus'],
                                    ['-v', '--bogus', '-p', '80'],
                                    ['a', 'b', '--bogus']])
def test_unknown_option(serve_cmd, tokens):
    with pytest.raises(UnknownOption, match='"--bogus" not defined') as exc_info:
        scan_tokens(serve_cmd, tokens)
    assert exc_info.value.name == '--bogus'


def test_invalid_option_value(serve_cmd):
    with pytest.raises(InvalidValue, match='port expected a valid value'):
        scan_tokens(serve_cmd, ['--port', 'eighty'])


def test_choices():
    cmd = Command('run')
    mode = cmd.add(Opt('mode', ChoicesValue(['slow', 'fast']), long='mode'))

    scan_tokens(cmd, ['--mode', 'fast'])
    assert mode.value.value == 'fast'

    with pytest.raises(InvalidValue, match='expected one of'):
        scan_tokens(cmd, ['--mode', 'medium'])


def test_check_command():
    cmd = Command('copy')
    cmd.add(Opt('dest', long='dest'))
    cmd.add(Opt('note', long='note', optional=True))
    cmd.add(Args('src', arity=1))

    with pytest.raises(MissingRequired) as exc_info:
        check_command(cmd)
    assert exc_info.value.kind == 'option'
    assert exc_info.value.name == 'dest'

    scan_tokens(cmd, ['--dest', '/tmp'])
    with pytest.raises(MissingRequired, match='missing required argument: src') as exc_info:
        check_command(cmd)
    assert exc_info.value.kind == 'argument'

    cmd.parse_tokens(['a'])
    check_command(cmd)
