"""Run an App as a shell would and keep what it printed, along with its
exit status, without leaving the test process::

  client = TestClient(app)
  res = client.invoke(['build', '-h'])
  assert res.exit_code == 0
  assert 'Usage: prog build' in res.stdout
"""

import io
import sys
import shlex
import contextlib


class Result(object):
    """What one :meth:`TestClient.invoke` call left behind: the two
    output streams, the exit code, and the ParseContext if the App
    returned normally.
    """

    def __init__(self, stdout_bytes, stderr_bytes, exit_code, exc_info,
                 context=None, encoding='utf8'):
        self.stdout_bytes = stdout_bytes
        self.stderr_bytes = stderr_bytes
        self.exit_code = exit_code
        self.exc_info = exc_info  # set when the App raised SystemExit
        self.context = context
        self.encoding = encoding

    def _decode(self, raw):
        return raw.decode(self.encoding, 'replace').replace('\r\n', '\n')

    @property
    def exception(self):
        return self.exc_info[1] if self.exc_info else None

    @property
    def stdout(self):
        return self._decode(self.stdout_bytes)

    @property
    def stderr(self):
        return self._decode(self.stderr_bytes)

    def __repr__(self):
        cn = self.__class__.__name__
        if self.exception is not None:
            return '<%s %r>' % (cn, self.exception)
        return '<%s exit_code=%s>' % (cn, self.exit_code)


class TestClient(object):
    __test__ = False  # keeps pytest from collecting this

    def __init__(self, app, encoding='utf8'):
        self.app = app
        self.encoding = encoding

    @contextlib.contextmanager
    def _capture(self):
        out_buf, err_buf = io.BytesIO(), io.BytesIO()
        saved = sys.stdout, sys.stderr
        sys.stdout = io.TextIOWrapper(out_buf, encoding=self.encoding)
        sys.stderr = io.TextIOWrapper(err_buf, encoding=self.encoding)
        try:
            yield out_buf, err_buf
        finally:
            sys.stdout.flush()
            sys.stderr.flush()
            sys.stdout, sys.stderr = saved

    def invoke(self, args):
        """Call ``app.run()`` on *args*, a list of strings or a single
        shell-style string, and return a :class:`Result`. Errors other
        than SystemExit propagate.
        """
        if isinstance(args, str):
            args = shlex.split(args)
        exc_info, exit_code, context = None, 0, None

        with self._capture() as (out_buf, err_buf):
            try:
                context = self.app.run(list(args or ()))
            except SystemExit as se:
                exc_info = sys.exc_info()
                exit_code = se.code if se.code is not None else 0
                if not isinstance(exit_code, int):
                    print(exit_code)
                    exit_code = 1
            sys.stdout.flush()
            sys.stderr.flush()
            stdout_bytes, stderr_bytes = out_buf.getvalue(), err_buf.getvalue()

        return Result(stdout_bytes, stderr_bytes, exit_code, exc_info,
                      context=context, encoding=self.encoding)
