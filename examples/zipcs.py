"""Subcommands, each with its own options and positional slots.

  python examples/zipcs.py zip -o out.zip a.txt b.txt
  python examples/zipcs.py path --charset utf-8 some/path
  python examples/zipcs.py path -h
"""

from bindery import App, Command, Opt, Args, Value, ChoicesValue


def main(argv=None):
    app = App('zipcs', version='0.3.0',
              doc='Useful tools for zip archives and path encodings')
    app.add_addr('Source', 'https://example.com/zipcs')
    app.add(Opt('quiet', True, short='q', long='quiet', doc='print nothing'))

    zip_cmd = app.add(Command('zip', doc='pack files into an archive',
                              allow_zero_args=False))
    zip_cmd.add(Opt('output', short='o', long='output', doc='archive to write'))
    zip_cmd.add(Opt('level', Value(int, default=6), short='l', long='level',
                    doc='compression level, 0-9'))
    zip_cmd.add(Args('files', doc='files to pack'))

    path_cmd = app.add(Command('path', doc='re-encode a path'))
    path_cmd.add(Opt('charset', ChoicesValue(['utf-8', 'gbk', 'latin-1'], default='utf-8'),
                     short='cs', long='charset', doc='target encoding'))
    path_cmd.add(Args('path', arity=1))

    ctx = app.run(argv)
    if ctx['quiet']:
        return 0

    if ctx.subcmd == 'zip':
        print('packing %s into %s at level %s'
              % (', '.join(ctx['files']), ctx['output'], ctx['level']))
    elif ctx.subcmd == 'path':
        print(ctx['path'].encode(ctx['charset'], 'replace'))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
