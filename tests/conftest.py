# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: a sample configuration spread over two files."""

import pytest

SAMPLE_MAIN = """\
# Sample configuration
%block oneblock
{
    top :: user=root;
    %block lowerblock0
    {
        %block lowerblock
        {
            inner-row :: user=alice; age=42;
                      += milli=1234567890123; ratio=0.25;
        }
    }
}

%block thirdblock
{
    some-row   :: numProcs=8; name = worker ;   # trailing comment
    anotherrow :: start_time=090000; end_time=235000;
}

%include "{extra}"

%block someblock
{
    somerow     :: user=nobody;
    another-row :: enabled=true;
    lmirror     :: plugins=transpath,split;
    proxy       :: host=proxy.local; port=3128;
}

%block anotherblock
{
    job :: active=1; prereqlist=a,b; actionlist=run;
        += days=mon,tue; start_time=0800; end_time=1700;
        += watch_path=/tmp; region=eu; datelist=; period=1d;
        += freq=10; ratio=0.3; TZ=UTC;
}
"""

SAMPLE_EXTRA = """\
%block block4
{
    anotherrow :: millis=123456789; big=9999999999;
}
"""


@pytest.fixture
def sample_cfg(tmp_path):
    """Write the sample files and return the path of the top-level one."""
    extra = tmp_path / 'extra.cfg'
    extra.write_text(SAMPLE_EXTRA)
    main = tmp_path / 'sample.cfg'
    main.write_text(SAMPLE_MAIN.replace('{extra}', str(extra)))
    return main
