import textwrap

import pytest

from vrscene import ParserParams, parse_vr
from vrscene.logger import init


@pytest.fixture(autouse=True)
def quiet_logger():
    init(None, False)
    yield
    init(None, False)


@pytest.fixture
def params():
    return ParserParams()


@pytest.fixture
def parse(params):
    """Parse dedented source with explicit (environment independent) params."""

    def _parse(source, **kwargs):
        kwargs.setdefault("params", params)
        return parse_vr(textwrap.dedent(source), **kwargs)

    return _parse
