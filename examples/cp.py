"""A toy cp(1), showing options, an unbounded run of sources, and a
fixed destination bound from the end of the line.

  python examples/cp.py -v a.txt b.txt dest/
  python examples/cp.py --help
"""

from bindery import App, Opt, Args, Value


def parse_mode(text):
    return int(text, 8)


def main(argv=None):
    app = App('cp', version='0.1.0', doc='copy files (or pretend to)',
              allow_zero_args=False)
    app.add(Opt('verbose', True, short='v', long='verbose',
                doc='print each file as it is copied'))
    app.add(Opt('mode', Value(parse_mode, default=0o644),
                short='m', long='mode', doc='permission bits for new files, in octal'))
    app.add(Args('srcs', doc='files to copy'))
    app.add(Args('dest', arity=1, doc='destination file or directory'))

    ctx = app.run(argv)

    for src in ctx['srcs']:
        if ctx['verbose']:
            print('%s -> %s (mode %o)' % (src, ctx['dest'], ctx['mode']))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
