import os
import sys
import array
import textwrap

from bindery.utils import (unwrap_text,
                           format_opt_label,
                           format_args_label,
                           format_slot_post_doc)


def _get_termios_winsize():
    # TLPI, 62.9 (p. 1319)
    import fcntl
    import termios

    winsize = array.array('H', [0, 0, 0, 0])

    assert not fcntl.ioctl(sys.stdout, termios.TIOCGWINSZ, winsize)

    ws_row, ws_col, _, _ = winsize

    return ws_row, ws_col


def _get_environ_winsize():
    # the argparse approach. ROWS/COLUMNS are special shell variables.
    try:
        rows, columns = int(os.environ['ROWS']), int(os.environ['COLUMNS'])
    except (KeyError, ValueError):
        rows, columns = None, None
    return rows, columns


def get_winsize():
    rows, cols = None, None
    try:
        rows, cols = _get_termios_winsize()
    except Exception:
        rows, cols = _get_environ_winsize()
    return rows, cols


def _wrap_pair(indent, label, sep, doc, doc_start, max_doc_width):
    ret = []
    append = ret.append
    lhs = indent + label

    if not doc:
        append(lhs)
        return ret

    len_sep = len(sep)
    wrapped_doc = textwrap.wrap(doc, max_doc_width)
    if len(lhs) <= doc_start:
        lhs_f = lhs.ljust(doc_start - len(sep)) + sep
        append(lhs_f + wrapped_doc[0])
    else:
        append(lhs)
        append((' ' * (doc_start - len_sep)) + sep + wrapped_doc[0])

    for line in wrapped_doc[1:]:
        append(' ' * doc_start + line)

    return ret


def _get_full_doc(slot):
    return ' '.join([p for p in (slot.doc, format_slot_post_doc(slot)) if p])


class HelpHandler(object):
    """Renders help, version, and error text for an App. The App's
    ``run()`` prints what this returns; nothing here touches the
    parse itself.

    All keyword arguments override entries in *default_context*.
    """
    default_context = {
        'usage_label': 'Usage:',
        'subcmd_section_heading': 'Subcommands:',
        'opts_section_heading': 'Options:',
        'args_section_heading': 'Arguments:',
        'authors_section_heading': 'Authors:',
        'addrs_section_heading': 'Links:',
        'error_label': 'error:',
        'section_break': '',
        'subcmd_example': 'subcommand',
        'opts_example': '[OPTIONS]',
        'width': None,
        'max_width': 120,
        'min_doc_width': 50,
        'doc_separator': '   ',
        'section_indent': '  ',
    }

    def __init__(self, **kwargs):
        ctx = {}
        for key, val in self.default_context.items():
            ctx[key] = kwargs.pop(key, val)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r' % list(kwargs.keys()))
        self.ctx = ctx

    def _get_layout(self, labels):
        ctx = self.ctx
        return get_layout(labels=labels,
                          indent=ctx['section_indent'],
                          sep=ctx['doc_separator'],
                          width=ctx['width'],
                          max_width=ctx['max_width'],
                          min_doc_width=ctx['min_doc_width'])

    def _get_section(self, heading, pairs):
        ctx = self.ctx
        ret = [heading]
        layout = self._get_layout(labels=[label for label, _ in pairs])
        for label, doc in pairs:
            ret.extend(_wrap_pair(indent=ctx['section_indent'],
                                  label=label,
                                  sep=ctx['doc_separator'],
                                  doc=doc,
                                  doc_start=layout['doc_start'],
                                  max_doc_width=layout['doc_width']))
        ret.append(ctx['section_break'])
        return ret

    def get_help_text(self, app, subcmd=None):
        ctx = self.ctx
        cmd = app.get_command(subcmd)

        ret = [self.get_usage_line(app, subcmd=subcmd), ctx['section_break']]
        doc = cmd.doc if subcmd else (app.doc or cmd.doc)
        if doc:
            ret.extend([unwrap_text(doc), ctx['section_break']])

        if subcmd is None and app.subcmds:
            pairs = [(name, sc.doc) for name, sc in app.subcmds.items()]
            ret.extend(self._get_section(ctx['subcmd_section_heading'], pairs))

        opts = list(cmd.opts.values())
        if opts:
            pairs = [(format_opt_label(opt), _get_full_doc(opt)) for opt in opts]
            ret.extend(self._get_section(ctx['opts_section_heading'], pairs))

        if cmd.args:
            pairs = [(format_args_label(a), _get_full_doc(a)) for a in cmd.args]
            ret.extend(self._get_section(ctx['args_section_heading'], pairs))

        if subcmd is None and app.authors:
            pairs = [('%s <%s>' % (name, email) if email else name, '')
                     for name, email in app.authors]
            ret.extend(self._get_section(ctx['authors_section_heading'], pairs))

        if subcmd is None and app.addrs:
            pairs = [(name, url) for name, url in app.addrs]
            ret.extend(self._get_section(ctx['addrs_section_heading'], pairs))

        return '\n'.join(ret).rstrip() + '\n'

    def get_usage_line(self, app, subcmd=None):
        ctx = self.ctx
        parts = [ctx['usage_label']] if ctx['usage_label'] else []
        append = parts.append

        append(app.name)
        if subcmd:
            append(subcmd)
        elif app.subcmds:
            append('[%s]' % ctx['subcmd_example'])

        cmd = app.get_command(subcmd)
        if cmd.opts:
            append(ctx['opts_example'])
        for args_ in cmd.args:
            append(format_args_label(args_))

        return ' '.join(parts)

    def get_version_text(self, app, subcmd=None):
        if subcmd:
            cmd = app.get_command(subcmd)
            return '%s %s %s' % (app.name, subcmd, cmd.version or app.version)
        return ('%s %s' % (app.name, app.version)).rstrip()

    def get_error_text(self, app, ape):
        """Format an ArgumentParseError for display, attributed to the
        command which was active when it was raised."""
        ctx = self.ctx
        subcmd = getattr(ape.command, 'name', None)
        msg = ctx['error_label'] + ' ' + app.name
        if subcmd:
            msg += ' ' + subcmd
        if ape.message:
            msg += ': ' + ape.message
        return msg + '\n\n' + self.get_usage_line(app, subcmd=subcmd)


def get_layout(labels, indent, sep, width=None, max_width=120, min_doc_width=40):
    if width is None:
        _, width = get_winsize()
        if not width:
            width = 80
        width = min(width, max_width)
        width -= 2

    len_sep = len(sep)
    len_indent = len(indent)

    max_label_width = 0
    max_doc_width = min_doc_width
    doc_start = width - min_doc_width
    for label in labels:
        cur_len = len(label)
        if cur_len < max_label_width:
            continue
        max_label_width = cur_len
        if (len_indent + cur_len + len_sep + min_doc_width) < width:
            max_doc_width = width - max_label_width - len_sep - len_indent
            doc_start = len_indent + cur_len + len_sep

    return {'width': width,
            'label_width': max_label_width,
            'doc_width': max_doc_width,
            'doc_start': doc_start}
