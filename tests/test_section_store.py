import hashlib

import pytest

from markupbook.notebook import (
    ETagMismatch,
    InMemoryNotebookStorage,
    NoSections,
    NotFound,
    SectionNotFound,
    SectionStore,
    split,
)


def test_list_pages(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## First\n\n<p>one</p>\n## Second\n\n<p>two</p>\n")
    assert store.list_pages() == ["First", "Second"]


def test_empty_document(tmp_path):
    notebook_dir = tmp_path / "markups"
    store = SectionStore.at(notebook_dir)
    assert store.read() == ""
    assert store.list_pages() == []
    assert notebook_dir.is_dir()
    assert not (notebook_dir / "notebook.md").exists()


def test_write_creates_directory(tmp_path):
    notebook_dir = tmp_path / "nested" / "markups"
    store = SectionStore.at(notebook_dir)
    store.write("# Notebook\n")
    assert (notebook_dir / "notebook.md").read_bytes() == b"# Notebook\n"
    assert [p.name for p in notebook_dir.iterdir()] == ["notebook.md"]


def test_load_page_matches_split(tmp_path):
    md = "# Notebook\n\n## One\n\n<p>a</p>\n## Two\n\n<p>b</p>\n"
    store = SectionStore.at(tmp_path)
    store.write(md)
    for section in split(md):
        assert store.load_page(section.title) == section.content


def test_load_page_missing(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## One\n\n<p>a</p>\n")
    with pytest.raises(NotFound):
        store.load_page("Nope")


def test_save_page_renames_and_replaces(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## One\n\n<p>a</p>\n")
    store.save_page("One", "Uno", "<p>A</p>")
    assert store.list_pages() == ["Uno"]
    assert store.read() == "# Notebook\n\n## Uno\n\n<p>A</p>\n"


def test_save_preserves_preamble_and_other_sections(tmp_path):
    preamble = "# Notebook\n\nintro text\n\n"
    a = "## A\n\n<p>a</p>\n\n"
    b = "## B\n\n<p>b</p>\n"
    c = "## C\n\n<p>c</p>\n  trailing  \n"
    store = SectionStore.at(tmp_path)
    store.write(preamble + a + b + c)

    store.save_page("B", "B2", "<p>new</p>")

    assert store.read() == preamble + a + "## B2\n\n<p>new</p>\n" + c
    assert store.list_pages() == ["A", "B2", "C"]


def test_save_page_targets_first_duplicate(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("## Dup\nfirst\n## Dup\nsecond\n")
    store.save_page("Dup", "Dup", "changed")
    assert store.read() == "## Dup\n\nchanged\n## Dup\nsecond\n"


def test_save_page_errors(tmp_path):
    store = SectionStore.at(tmp_path)
    with pytest.raises(NoSections):
        store.save_page("X", "Y", "<p>x</p>")

    store.write("# Notebook\n\n## A\n\n<p>a</p>\n")
    before = store.read()
    with pytest.raises(SectionNotFound):
        store.save_page("X", "Y", "<p>x</p>")
    assert store.read() == before


def test_preamble_only_document_has_no_sections(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\nno pages yet\n")
    with pytest.raises(NoSections):
        store.save_page("A", "B", "html")


def test_etag_is_stable_and_hex(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("")
    first = store.compute_etag()
    store.write("")
    assert store.compute_etag() == first
    assert len(first) == 64
    assert first == first.lower()
    int(first, 16)


def test_etag_changes_on_any_byte(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## A\n\n<p>a</p>")
    without_newline = store.compute_etag()
    store.write("# Notebook\n\n## A\n\n<p>a</p>\n")
    assert store.compute_etag() != without_newline
    store.write("# Notebook\n\n## A\n\n<p>b</p>\n")
    assert store.compute_etag() != without_newline


def test_save_page_if_match(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## A\n\n<p>a</p>\n")
    etag = store.compute_etag()
    store.save_page_if_match("A", "A", "<p>A</p>", etag)
    assert store.load_page("A") == "\n<p>A</p>\n"

    with pytest.raises(ETagMismatch) as excinfo:
        store.save_page_if_match("A", "A", "<p>A</p>", "deadbeef")
    assert excinfo.value.expected == "deadbeef"
    assert excinfo.value.actual == store.compute_etag()


def test_save_page_if_match_without_etag_saves(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("## A\n\n<p>a</p>\n")
    store.save_page_if_match("A", "B", "<p>b</p>", "")
    store.save_page_if_match("B", "C", "<p>c</p>", None)
    assert store.list_pages() == ["C"]


def test_external_change_is_detected(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## A\n\n<p>a</p>\n")
    etag = store.compute_etag()

    external = "# Notebook\n\n## A\n\n<p>changed</p>\n"
    (tmp_path / "notebook.md").write_bytes(external.encode("utf-8"))
    assert store.compute_etag() != etag

    with pytest.raises(ETagMismatch):
        store.save_page_if_match("A", "A", "<p>a</p>", etag)
    assert (tmp_path / "notebook.md").read_bytes() == external.encode("utf-8")


def test_insert_on_empty_document(tmp_path):
    store = SectionStore.at(tmp_path)
    store.insert_new_section("NewPage")
    assert store.list_pages() == ["NewPage"]
    assert store.read() == "# Notebook\n\n\n\n## NewPage\n\n<p><em>New page.</em></p>\n"


def test_insert_appends_and_allows_duplicates(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("# Notebook\n\n## A\n\n<p>a</p>\n")
    store.insert_new_section("A")
    assert store.list_pages() == ["A", "A"]
    assert store.read().startswith("# Notebook\n\n## A\n\n<p>a</p>\n\n\n## A\n")


def test_rename_preserves_content(tmp_path):
    md = "# Notebook\n\n## Old\n\n<p>keep\r\nme</p>\n\n## Next\nx\n"
    store = SectionStore.at(tmp_path)
    store.write(md)
    before = store.load_page("Old")

    store.rename_section("Old", "Renamed")

    assert store.list_pages() == ["Renamed", "Next"]
    assert store.load_page("Renamed") == before
    assert store.read() == md.replace("## Old\n", "## Renamed\n")


def test_rename_heading_without_terminator(tmp_path):
    store = SectionStore.at(tmp_path)
    store.write("## A\na\n## Last")
    store.rename_section("Last", "Final")
    assert store.read() == "## A\na\n## Final"


def test_rename_missing_section(tmp_path):
    store = SectionStore.at(tmp_path)
    with pytest.raises(SectionNotFound):
        store.rename_section("Nope", "X")
    store.insert_new_section("Page")
    with pytest.raises(SectionNotFound):
        store.rename_section("Nope", "X")


def test_insert_then_rename(tmp_path):
    store = SectionStore.at(tmp_path)
    store.insert_new_section("NewPage")
    store.rename_section("NewPage", "Renamed")
    assert store.list_pages() == ["Renamed"]


def test_failed_operations_do_not_write():
    storage = InMemoryNotebookStorage("# Notebook\n\n## A\n\n<p>a</p>\n")
    store = SectionStore(storage)
    with pytest.raises(SectionNotFound):
        store.save_page("B", "C", "x")
    with pytest.raises(SectionNotFound):
        store.rename_section("B", "C")
    with pytest.raises(ETagMismatch):
        store.save_page_if_match("A", "A", "x", "0" * 64)
    assert storage.writes == 0


def test_in_memory_storage_round_trip():
    storage = InMemoryNotebookStorage()
    store = SectionStore(storage)
    store.insert_new_section("X")
    store.save_page("X", "Y", "<p>y</p>")
    assert storage.text == "# Notebook\n\n\n\n## Y\n\n<p>y</p>\n"
    assert storage.writes == 2


def test_non_utf8_notebook_round_trips(tmp_path):
    raw = b"# Notebook\n\n## Caf\xe9\n\nbody\n## Next\n\n<p>n</p>\n"
    (tmp_path / "notebook.md").write_bytes(raw)
    store = SectionStore.at(tmp_path)

    assert store.compute_etag() == hashlib.sha256(raw).hexdigest()
    assert len(store.list_pages()) == 2
    assert store.list_pages()[1] == "Next"

    store.write(store.read())
    assert (tmp_path / "notebook.md").read_bytes() == raw


def test_non_utf8_title_can_be_edited(tmp_path):
    raw = b"# Notebook\n\n## Caf\xe9\n\nbody\n## Next\n\n<p>n</p>\n"
    (tmp_path / "notebook.md").write_bytes(raw)
    store = SectionStore.at(tmp_path)
    title = store.list_pages()[0]

    store.save_page("Next", "Later", "<p>l</p>")
    assert (tmp_path / "notebook.md").read_bytes() == b"# Notebook\n\n## Caf\xe9\n\nbody\n## Later\n\n<p>l</p>\n"

    store.rename_section(title, "Cafe")
    assert store.list_pages() == ["Cafe", "Later"]
    assert store.load_page("Cafe") == "\nbody\n"
