"""Shared test fixtures for cppmetrics tests."""

import pytest

from cppmetrics.codemodel import BlockType, CodeFunction, CppBlock, SourceFile, VariabilityModel, \
    VariabilityVariable
from cppmetrics.lib.formula import TRUE, conjunction, negate


SRCML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

# test.c:
#  1  #ifdef A
#  2  int foo()
#  3  {
#  4  #if B && !defined(C)
#  5      return 1;
#  6  #else
#  7      return 0;
#  8  #endif
#  9  }
# 10  #endif
SRCML_FOO = SRCML_HEADER + (
    '<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" '
    'revision="1.0.0" language="C" filename="test.c">'
    '<cpp:ifdef>#<cpp:directive>ifdef</cpp:directive> <name>A</name></cpp:ifdef>\n'
    '<function><type><name>int</name></type> <name>foo</name><parameter_list>()</parameter_list>\n'
    '<block>{<block_content>\n'
    '<cpp:if>#<cpp:directive>if</cpp:directive> <expr><name>B</name> <operator>&amp;&amp;</operator> '
    '<operator>!</operator><call><name>defined</name><argument_list>(<argument><expr><name>C</name>'
    '</expr></argument>)</argument_list></call></expr></cpp:if>\n'
    '    <return>return <expr><literal type="number">1</literal></expr>;</return>\n'
    '<cpp:else>#<cpp:directive>else</cpp:directive></cpp:else>\n'
    '    <return>return <expr><literal type="number">0</literal></expr>;</return>\n'
    '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
    '</block_content>}</block></function>\n'
    '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
    '</unit>\n'
)

# unbalanced.c:
#  1  #ifdef A
#  2  int x;
#  3  #endif
#  4  #endif
SRCML_UNBALANCED = SRCML_HEADER + (
    '<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" '
    'revision="1.0.0" language="C" filename="unbalanced.c">'
    '<cpp:ifdef>#<cpp:directive>ifdef</cpp:directive> <name>A</name></cpp:ifdef>\n'
    '<decl_stmt><decl><type><name>int</name></type> <name>x</name></decl>;</decl_stmt>\n'
    '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
    '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
    '</unit>\n'
)


# elif.c:
#  1  int bar()
#  2  {
#  3  #if A
#  4      return 1;
#  5  #elif B
#  6      return 2;
#  7  #else
#  8      return 3;
#  9  #endif
# 10  }
SRCML_ELIF = SRCML_HEADER + (
    '<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" '
    'revision="1.0.0" language="C" filename="elif.c">'
    '<function><type><name>int</name></type> <name>bar</name><parameter_list>()</parameter_list>\n'
    '<block>{<block_content>\n'
    '<cpp:if>#<cpp:directive>if</cpp:directive> <expr><name>A</name></expr></cpp:if>\n'
    '    <return>return <expr><literal type="number">1</literal></expr>;</return>\n'
    '<cpp:elif>#<cpp:directive>elif</cpp:directive> <expr><name>B</name></expr></cpp:elif>\n'
    '    <return>return <expr><literal type="number">2</literal></expr>;</return>\n'
    '<cpp:else>#<cpp:directive>else</cpp:directive></cpp:else>\n'
    '    <return>return <expr><literal type="number">3</literal></expr>;</return>\n'
    '<cpp:endif>#<cpp:directive>endif</cpp:directive></cpp:endif>\n'
    '</block_content>}</block></function>\n'
    '</unit>\n'
)


@pytest.fixture
def srcml_file(tmp_path):
    """srcML file of test.c with one function inside an #ifdef."""
    path = tmp_path / "test.c.xml"
    path.write_text(SRCML_FOO)
    return str(path)


@pytest.fixture
def elif_srcml_file(tmp_path):
    """srcML file of elif.c with an #if-#elif-#else chain in a function."""
    path = tmp_path / "elif.c.xml"
    path.write_text(SRCML_ELIF)
    return str(path)


@pytest.fixture
def unbalanced_srcml_file(tmp_path):
    """srcML file with one #endif too many."""
    path = tmp_path / "unbalanced.c.xml"
    path.write_text(SRCML_UNBALANCED)
    return str(path)


@pytest.fixture
def make_source_file():
    """Builds a source file with one top-level block per condition."""
    def _make(path, *conditions):
        sourcefile = SourceFile(path)
        for line, condition in enumerate(conditions, start=1):
            sourcefile.blocks.append(CppBlock(condition, condition, BlockType.IF, line))
        return sourcefile
    return _make


@pytest.fixture
def make_function():
    """Builds a function from (type, condition) pairs of directly nested
    blocks; presence conditions are those of sibling branches."""
    def _make(name, pc=TRUE, blocks=(), line=1):
        function = CodeFunction(name, line, pc)
        previous = []
        for offset, (type, condition) in enumerate(blocks, start=1):
            if type == BlockType.IF:
                previous = []
            negated = [negate(p) for p in previous]
            block = CppBlock(condition, conjunction(pc, *(negated + [condition])), type, line + offset)
            function.blocks.append(block)
            function.children.append(block)
            if condition is not None:
                previous.append(condition)
        return function
    return _make


@pytest.fixture
def var_model():
    """Variability model with a bool, a tristate and a string variable."""
    return VariabilityModel([
        VariabilityVariable("A", "bool"),
        VariabilityVariable("B", "tristate"),
        VariabilityVariable("C", "string"),
    ])
