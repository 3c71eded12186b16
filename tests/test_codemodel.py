"""Tests for the code model built from srcML files."""

import pytest

from cppmetrics.codemodel import BlockType, IfdefEndifMismatchError, SourceFile, CppBlock, \
    readSrcML, readVariabilityModel, returnFileNames
from cppmetrics.lib.formula import Conjunction, Negation, Variable


A = Variable("A")
INNER = Conjunction(Variable("B"), Negation(Variable("C")))


class TestReadSrcML:
    """Tests for building the code model of one file."""

    def test_source_path(self, srcml_file):
        sourcefile = readSrcML(srcml_file)

        assert sourcefile.path == srcml_file
        assert sourcefile.sourcePath == "test.c"

    def test_top_level_block(self, srcml_file):
        sourcefile = readSrcML(srcml_file)

        assert len(sourcefile.blocks) == 1
        block = sourcefile.blocks[0]
        assert block.type == BlockType.IF
        assert block.condition == A
        assert block.presenceCondition == A
        assert (block.lineStart, block.lineEnd) == (1, 10)

    def test_nested_branches(self, srcml_file):
        outer = readSrcML(srcml_file).blocks[0]

        assert [b.type for b in outer.children] == [BlockType.IF, BlockType.ELSE]
        inner, other = outer.children
        assert inner.condition == INNER
        assert inner.presenceCondition == Conjunction(A, INNER)
        assert (inner.lineStart, inner.lineEnd) == (4, 6)
        assert other.condition is None
        assert other.presenceCondition == Conjunction(A, Negation(INNER))
        assert (other.lineStart, other.lineEnd) == (6, 8)

    def test_function(self, srcml_file):
        sourcefile = readSrcML(srcml_file)

        assert len(sourcefile.functions) == 1
        function = sourcefile.functions[0]
        assert function.name == "foo"
        assert (function.lineStart, function.lineEnd) == (2, 9)
        assert function.presenceCondition == A
        assert [b.type for b in function.blocks] == [BlockType.IF, BlockType.ELSE]
        assert function.children == function.blocks

    def test_elif_chain(self, elif_srcml_file):
        sourcefile = readSrcML(elif_srcml_file)
        function = sourcefile.functions[0]

        assert function.name == "bar"
        assert (function.lineStart, function.lineEnd) == (1, 10)
        assert [b.type for b in sourcefile.blocks] == [BlockType.IF, BlockType.ELSEIF, BlockType.ELSE]
        assert [b.condition for b in sourcefile.blocks] == [A, Variable("B"), None]
        assert [b.presenceCondition for b in sourcefile.blocks] == [
            A,
            Conjunction(Negation(A), Variable("B")),
            Conjunction(Negation(A), Negation(Variable("B"))),
        ]
        assert [b.lineStart for b in sourcefile.blocks] == [3, 5, 7]
        assert function.children == sourcefile.blocks

    def test_pre_order(self, srcml_file):
        blocks = list(readSrcML(srcml_file).iterBlocks())

        assert [b.lineStart for b in blocks] == [1, 4, 6]

    def test_unbalanced_endif(self, unbalanced_srcml_file):
        with pytest.raises(IfdefEndifMismatchError) as e:
            readSrcML(unbalanced_srcml_file)
        assert e.value.line == 4

    def test_missing_endif(self, tmp_path):
        path = tmp_path / "open.c.xml"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            '<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" '
            'language="C">'
            '<cpp:ifndef>#<cpp:directive>ifndef</cpp:directive> <name>X</name></cpp:ifndef>\n'
            '</unit>\n')

        with pytest.raises(IfdefEndifMismatchError):
            readSrcML(str(path))

    def test_source_path_from_file_name(self, tmp_path):
        path = tmp_path / "plain.c.xml"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            '<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" '
            'language="C">'
            '<cpp:ifndef>#<cpp:directive>ifndef</cpp:directive> <name>X</name></cpp:ifndef>\n'
            '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
            '</unit>\n')
        sourcefile = readSrcML(str(path))

        assert sourcefile.sourcePath == str(path)[:-len(".xml")]
        assert sourcefile.blocks[0].condition == Negation(Variable("X"))


class TestSourceFile:
    def test_iter_blocks_nested(self):
        sourcefile = SourceFile("x.c")
        first = CppBlock(A, A, BlockType.IF, 1)
        nested = CppBlock(Variable("B"), Conjunction(A, Variable("B")), BlockType.IF, 2)
        first.children.append(nested)
        second = CppBlock(Variable("C"), Variable("C"), BlockType.IF, 5)
        sourcefile.blocks += [first, second]

        assert list(sourcefile.iterBlocks()) == [first, nested, second]

    def test_source_path_defaults_to_path(self):
        assert SourceFile("x.c").sourcePath == "x.c"


class TestVariabilityModel:
    def test_read_semicolon_separated(self, tmp_path):
        path = tmp_path / "model.csv"
        path.write_text("Variable;Type\n# comment\nA;bool\nB;tristate\nC;\n")
        model = readVariabilityModel(str(path))

        assert len(model) == 3
        assert [v.name for v in model] == ["A", "B", "C"]
        assert model.getVariable("B").type == "tristate"
        assert model.getVariable("C").type == "unknown"
        assert "A" in model
        assert "D" not in model
        assert model.getVariable("D") is None

    def test_read_comma_separated(self, tmp_path):
        path = tmp_path / "model.csv"
        path.write_text("Variable,Type\nX,integer\n")
        model = readVariabilityModel(str(path))

        assert model.getVariable("X").type == "integer"

    def test_read_empty(self, tmp_path):
        path = tmp_path / "model.csv"
        path.write_text("")

        assert len(readVariabilityModel(str(path))) == 0


class TestReturnFileNames:
    def test_recursive_and_sorted(self, tmp_path):
        (tmp_path / "sub").mkdir()
        for name in ["b.c.xml", "a.c.xml", "sub/c.c.xml", "readme.txt"]:
            (tmp_path / name).write_text("")
        files = returnFileNames(str(tmp_path), ['.xml'])

        assert [f[len(str(tmp_path)) + 1:] for f in files] == ["a.c.xml", "b.c.xml", "sub/c.c.xml"]

    def test_missing_folder(self, tmp_path):
        assert returnFileNames(str(tmp_path / "missing")) == []
