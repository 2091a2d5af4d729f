"""Tests for svn output parsers."""

from __future__ import annotations

from svnkit.tools.parsers import (
    is_valid_revision,
    parse_info,
    parse_list,
    parse_log,
    parse_status,
)

INFO_OUTPUT = """\
Path: trunk
URL: svn://example.com/repo/trunk
Relative URL: ^/trunk
Repository Root: svn://example.com/repo
Repository UUID: 0f3c8f2e-1111-2222-3333-444455556666
Revision: 42
Node Kind: directory
Last Changed Author: alice
Last Changed Rev: 40
Last Changed Date: 2024-01-02 03:04:05 +0000 (Tue, 02 Jan 2024)
"""

STATUS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<status>
<target path=".">
<entry path="my%20file.txt">
<wc-status item="modified" revision="7" props="none">
<commit revision="5"><author>alice</author><date>2024-01-01T00:00:00Z</date></commit>
</wc-status>
</entry>
<entry path="new.txt">
<wc-status item="unversioned" props="none"></wc-status>
</entry>
<entry path="stale.txt">
<wc-status item="normal" revision="-1" props="none"></wc-status>
<repos-status item="modified" props="none">
<commit revision="9"><author>bob</author><date>2024-02-01T00:00:00Z</date></commit>
</repos-status>
</entry>
</target>
<against revision="9"/>
</status>
"""

LOG_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<log>
<logentry revision="12">
<author>alice</author>
<date>2024-03-01T10:00:00.000000Z</date>
<paths>
<path action="M" kind="file">/trunk/a%20b.txt</path>
<path action="A" kind="dir">/trunk/new</path>
</paths>
<msg>First line
Second line &amp; more</msg>
</logentry>
<logentry revision="bogus"><msg>skipped</msg></logentry>
<logentry revision="11">
<author>bob</author>
<date>2024-02-28T10:00:00.000000Z</date>
<msg></msg>
</logentry>
</log>
"""

LIST_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<lists>
<list path="svn://example.com/repo/trunk">
<entry kind="dir"><name>src</name><commit revision="3"/></entry>
<entry kind="file"><name>read%20me.txt</name><commit revision="4"/></entry>
</list>
</lists>
"""


def test_is_valid_revision() -> None:
    """Only non-negative numeric revision strings are valid."""
    assert is_valid_revision("0")
    assert is_valid_revision("42")
    assert not is_valid_revision("-1")
    assert not is_valid_revision("HEAD")
    assert not is_valid_revision(None)


def test_parse_info_maps_known_fields() -> None:
    """Known ``Key: value`` lines populate the info result."""
    info = parse_info(INFO_OUTPUT)

    assert info is not None
    assert info.url == "svn://example.com/repo/trunk"
    assert info.relative_url == "^/trunk"
    assert info.revision == "42"
    assert info.node_kind == "directory"
    assert info.last_changed_rev == "40"
    assert info.last_changed_date == "2024-01-02 03:04:05 +0000 (Tue, 02 Jan 2024)"
    assert info.schedule is None


def test_parse_info_returns_none_for_unrecognized_text() -> None:
    """Output without known keys yields no result."""
    assert parse_info("") is None
    assert parse_info("svn: E155007: not a working copy") is None


def test_parse_status_reads_entries() -> None:
    """Entries map to status codes with revisions and commit details."""
    items = parse_status(STATUS_XML)

    assert [item.path for item in items] == ["my file.txt", "new.txt", "stale.txt"]
    modified, unversioned, stale = items
    assert modified.status == "M"
    assert modified.working_revision == "7"
    assert modified.last_changed_revision == "5"
    assert modified.last_changed_author == "alice"
    assert unversioned.status == "?"
    assert unversioned.working_revision is None
    assert unversioned.last_changed_revision is None
    assert unversioned.last_changed_author is None
    assert unversioned.last_changed_date is None
    assert stale.status == " "
    assert stale.working_revision is None
    assert stale.last_changed_revision == "9"
    assert stale.last_changed_author == "bob"


def test_parse_status_tolerates_noise_and_garbage() -> None:
    """Leading noise is skipped and malformed documents yield no items."""
    noisy = "svn: warning: W000001\n" + STATUS_XML

    assert len(parse_status(noisy)) == 3
    assert parse_status("<status><entry path='a'>") == []
    assert parse_status("not xml at all") == []


def test_parse_log_reads_entries_in_order() -> None:
    """Log entries keep document order and skip invalid revisions."""
    entries = parse_log(LOG_XML)

    assert [entry.revision for entry in entries] == ["12", "11"]
    first, second = entries
    assert first.author == "alice"
    assert first.message == "First line\nSecond line & more"
    assert first.paths is not None
    assert [(path.action, path.kind, path.path) for path in first.paths] == [
        ("M", "file", "/trunk/a b.txt"),
        ("A", "dir", "/trunk/new"),
    ]
    assert second.message == ""
    assert second.paths is None


def test_parse_log_rejects_external_entities() -> None:
    """Documents declaring entities are refused."""
    hostile = (
        '<?xml version="1.0"?><!DOCTYPE log [<!ENTITY x "boom">]>'
        '<log><logentry revision="1"><msg>&x;</msg></logentry></log>'
    )

    assert parse_log(hostile) == []


def test_parse_list_returns_names() -> None:
    """Entry names are decoded and returned in order."""
    assert parse_list(LIST_XML) == ["src", "read me.txt"]
    assert parse_list("") == []


def test_parsed_values_are_decoded_exactly_once() -> None:
    """Character references are resolved once and never a second time."""
    status_xml = (
        '<status><target path="."><entry path="Mole&amp;amp;More">'
        '<wc-status item="modified" revision="2"/></entry></target></status>'
    )
    list_xml = (
        "<lists><list><entry><name>a&#x2F;b&#39;c&amp;lt;</name></entry></list></lists>"
    )
    log_xml = (
        '<log><logentry revision="3"><paths>'
        '<path action="A" kind="file">/trunk/&lt;x&gt;&amp;amp;</path>'
        "</paths><msg>m</msg></logentry></log>"
    )

    assert [item.path for item in parse_status(status_xml)] == ["Mole&amp;More"]
    assert parse_list(list_xml) == ["a/b'c&lt;"]
    entries = parse_log(log_xml)
    assert entries[0].paths is not None
    assert entries[0].paths[0].path == "/trunk/<x>&amp;"


def test_missing_expected_root_yields_empty_results() -> None:
    """Well-formed documents with a different root produce no records."""
    document = '<?xml version="1.0"?><lists/>'

    assert parse_log(document) == []
    assert parse_status(document) == []
    assert parse_list('<?xml version="1.0"?><log/>') == []


def test_invalid_commit_revisions_are_absent() -> None:
    """Commit revisions of ``-1`` or non-numeric text are not reported."""
    status_xml = (
        '<status><target path="."><entry path="a.txt">'
        '<wc-status item="modified" revision="4">'
        '<commit revision="-1"><author>alice</author></commit></wc-status>'
        '<repos-status item="none"><commit revision="HEAD"/></repos-status>'
        "</entry></target></status>"
    )

    (item,) = parse_status(status_xml)

    assert item.last_changed_revision is None
    assert item.last_changed_author == "alice"
