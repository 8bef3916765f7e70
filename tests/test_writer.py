"""Tests for reading and writing the output tree."""

from dartql.core.ir import GenerationResult
from dartql.core.writer import OutputWriter, write_atomic


class TestOutputWriter:
    """Tests for OutputWriter."""

    def test_write_creates_directories(self, tmp_path):
        result = GenerationResult(
            fragments={"user.fragment.gql": "fragment userFragment on User {\n  id\n}\n"},
            documents={"user.gql": "query user {\n  user {\n    ...userFragment\n  }\n}\n\n"},
        )
        written = OutputWriter(tmp_path / "graphql").write(result)

        fragment = tmp_path / "graphql" / "fragments" / "user.fragment.gql"
        document = tmp_path / "graphql" / "documents" / "user.gql"
        assert sorted(written) == sorted([fragment, document])
        assert fragment.read_text() == "fragment userFragment on User {\n  id\n}\n"
        assert document.read_text().endswith("}\n")
        assert not document.read_text().endswith("\n\n")

    def test_no_temporary_files_left(self, tmp_path):
        result = GenerationResult(documents={"a.gql": "query a { a }"})
        OutputWriter(tmp_path).write(result)
        assert [p.name for p in (tmp_path / "documents").iterdir()] == ["a.gql"]

    def test_read_existing_documents(self, tmp_path):
        documents = tmp_path / "documents"
        documents.mkdir()
        (documents / "b.gql").write_text("query b { b }\n")
        (documents / "a.gql").write_text("query a { a }\n")
        (documents / "notes.txt").write_text("ignored")
        (documents / "nested.gql").mkdir()

        existing = OutputWriter(tmp_path).read_existing_documents()
        assert list(existing) == ["a.gql", "b.gql"]
        assert existing["b.gql"] == "query b { b }\n"

    def test_read_without_documents_directory(self, tmp_path):
        assert OutputWriter(tmp_path / "missing").read_existing_documents() == {}


class TestWriteAtomic:
    """Tests for write_atomic."""

    def test_overwrites_existing_file(self, tmp_path):
        path = tmp_path / "schema.gql"
        path.write_text("old")
        write_atomic(path, "new\n")
        assert path.read_text() == "new\n"
