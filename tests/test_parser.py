from textwrap import dedent

import pytest

from hclparse.exceptions import HCLSyntaxError
from hclparse.parser import parse_config, parse_expression, parse_file, parse_template
from hclparse.printer import render_to_string
from hclparse.syntax import Attribute, Block, Body, TemplateExpr


def dump(result) -> str:
    assert result.node is not None, str(result.diagnostics)
    return render_to_string(result.node, result.source)


def expected(text: str) -> str:
    return dedent(text).lstrip("\n")


def test_parse_block_with_attribute():
    result = parse_config('resource "aws_instance" "foo" { name = "bar" }', filename="main.tf")
    assert not result.diagnostics
    assert dump(result) == expected(
        """
        (Body
          (Block "resource" [aws_instance foo]
            (Attribute "name"
              (LiteralValueExpr "bar")
            )
          )
        )
        """
    )


def test_parse_empty_document():
    assert dump(parse_config("")) == "(Body\n)\n"


def test_parse_comments_only():
    assert dump(parse_config("# nothing here\n")) == "(Body\n)\n"


def test_body_keeps_source_order():
    """Attributes and blocks come out in the order they were written."""
    source = dedent(
        """
        b = 1
        locals {
          c = true
        }
        a = null
        """
    )
    result = parse_config(source)
    body = result.raise_for_errors()
    assert isinstance(body, Body)
    assert [type(item) for item in body.items] == [Attribute, Block, Attribute]
    assert [item.name for item in body.items if isinstance(item, Attribute)] == ["b", "a"]
    assert dump(result) == expected(
        """
        (Body
          (Attribute "b"
            (LiteralValueExpr "1")
          )
          (Block "locals" []
            (Attribute "c"
              (LiteralValueExpr "true")
            )
          )
          (Attribute "a"
            (LiteralValueExpr "null")
          )
        )
        """
    )


def test_parse_file(tmp_path):
    path = tmp_path / "main.tf"
    path.write_text('variable "region" {\n  default = "eu-west-1"\n}\n')
    result = parse_file(path)
    assert dump(result) == expected(
        """
        (Body
          (Block "variable" [region]
            (Attribute "default"
              (LiteralValueExpr "eu-west-1")
            )
          )
        )
        """
    )


def test_parse_expression_precedence():
    assert dump(parse_expression("1 + 2 * 3")) == expected(
        """
        (BinaryOpExpr "+"
          (LiteralValueExpr "1")
          (BinaryOpExpr "*"
            (LiteralValueExpr "2")
            (LiteralValueExpr "3")
          )
        )
        """
    )


def test_parse_parentheses():
    assert dump(parse_expression("(1 + 2) * 3")) == expected(
        """
        (BinaryOpExpr "*"
          (ParenthesesExpr
            (BinaryOpExpr "+"
              (LiteralValueExpr "1")
              (LiteralValueExpr "2")
            )
          )
          (LiteralValueExpr "3")
        )
        """
    )


def test_parse_logical_not():
    assert dump(parse_expression("!var.enabled")) == expected(
        """
        (UnaryOpExpr "!"
          (ScopeTraversalExpr "var.enabled")
        )
        """
    )


def test_parse_conditional():
    assert dump(parse_expression('var.prod ? "large" : "small"')) == expected(
        """
        (ConditionalExpr
          (ScopeTraversalExpr "var.prod")
          (LiteralValueExpr "large")
          (LiteralValueExpr "small")
        )
        """
    )


def test_traversal_steps_fold_into_one_node():
    assert dump(parse_expression("aws_instance.web[0].id")) == (
        '(ScopeTraversalExpr "aws_instance.web[0].id")\n'
    )


def test_traversal_after_function_call_is_relative():
    assert dump(parse_expression('lookup(var.amis, "us-east-1").id')) == expected(
        """
        (RelativeTraversalExpr ".id"
          (FunctionCallExpr "lookup"
            (ScopeTraversalExpr "var.amis")
            (LiteralValueExpr "us-east-1")
          )
        )
        """
    )


def test_index_with_variable_key():
    assert dump(parse_expression("var.list[count.index]")) == expected(
        """
        (IndexExpr
          (ScopeTraversalExpr "var.list")
          (ScopeTraversalExpr "count.index")
        )
        """
    )


def test_full_splat():
    assert dump(parse_expression("aws_instance.web[*].id")) == expected(
        """
        (SplatExpr
          (ScopeTraversalExpr "aws_instance.web")
          (RelativeTraversalExpr ".id"
            (AnonSymbolExpr)
          )
        )
        """
    )


def test_function_call_without_arguments():
    assert dump(parse_expression("timestamp()")) == '(FunctionCallExpr "timestamp"\n)\n'


def test_function_call_expanding_final_argument():
    result = parse_expression("min(var.sizes...)")
    call = result.raise_for_errors()
    assert call.expand_final is True
    assert dump(result) == expected(
        """
        (FunctionCallExpr "min"
          (ScopeTraversalExpr "var.sizes")
        )
        """
    )


def test_tuple_for_with_condition():
    assert dump(parse_expression('[for s in var.names : upper(s) if s != ""]')) == expected(
        """
        (ForExpr val="s"
          (ScopeTraversalExpr "var.names")
          (FunctionCallExpr "upper"
            (ScopeTraversalExpr "s")
          )
          (BinaryOpExpr "!="
            (ScopeTraversalExpr "s")
            (LiteralValueExpr "")
          )
        )
        """
    )


def test_object_for_with_key_and_value():
    assert dump(parse_expression("{for k, v in var.tags : k => v}")) == expected(
        """
        (ForExpr key="k" val="v"
          (ScopeTraversalExpr "var.tags")
          (ScopeTraversalExpr "k")
          (ScopeTraversalExpr "v")
        )
        """
    )


def test_tuple_and_object_constructors():
    assert dump(parse_expression('{ name = "web", ports = [80, 443] }')) == expected(
        """
        (ObjectConsExpr
          (ObjectConsKeyExpr
          )
          (LiteralValueExpr "web")
          (ObjectConsKeyExpr
          )
          (TupleConsExpr
            (LiteralValueExpr "80")
            (LiteralValueExpr "443")
          )
        )
        """
    )


def test_quoted_template_with_interpolation():
    assert dump(parse_expression('"Hello, ${var.name}!"')) == expected(
        """
        (TemplateExpr
          (LiteralValueExpr "Hello, ")
          (ScopeTraversalExpr "var.name")
          (LiteralValueExpr "!")
        )
        """
    )


def test_quoted_template_with_single_interpolation_is_wrapped():
    assert dump(parse_expression('"${var.name}"')) == expected(
        """
        (TemplateWrapExpr
          (ScopeTraversalExpr "var.name")
        )
        """
    )


def test_parse_template_single_interpolation():
    assert dump(parse_template("${foo.bar}")) == expected(
        """
        (TemplateWrapExpr
          (ScopeTraversalExpr "foo.bar")
        )
        """
    )


def test_parse_template_with_text():
    assert dump(parse_template("Hello ${name}")) == expected(
        """
        (TemplateExpr
          (LiteralValueExpr "Hello ")
          (ScopeTraversalExpr "name")
        )
        """
    )


def test_quoted_string_keeps_surrounding_spaces():
    assert dump(parse_expression('"  hi  "')) == '(LiteralValueExpr "  hi  ")\n'


def test_block_label_keeps_spaces():
    body = parse_config('module " net " {}').raise_for_errors()
    assert body.items[0].labels == [" net "]


def test_whitespace_between_interpolations_is_a_literal():
    assert dump(parse_expression('"${a} ${b}"')) == expected(
        """
        (TemplateExpr
          (ScopeTraversalExpr "a")
          (LiteralValueExpr " ")
          (ScopeTraversalExpr "b")
        )
        """
    )


def test_template_padded_interpolation_is_not_wrapped():
    assert dump(parse_template("  ${x}  ")) == expected(
        """
        (TemplateExpr
          (LiteralValueExpr "  ")
          (ScopeTraversalExpr "x")
          (LiteralValueExpr "  ")
        )
        """
    )


def test_heredoc_literal_ends_with_newline():
    result = parse_config("msg = <<EOT\nhello\nEOT\n")
    assert dump(result) == (
        "(Body\n"
        '  (Attribute "msg"\n'
        "    (TemplateExpr\n"
        '      (LiteralValueExpr "hello\n'
        '")\n'
        "    )\n"
        "  )\n"
        ")\n"
    )


def test_for_directive_keeps_trailing_space():
    assert dump(parse_expression('"%{ for v in xs }${v} %{ endfor }"')) == expected(
        """
        (TemplateExpr
          (TemplateJoinExpr
            (ForExpr val="v"
              (ScopeTraversalExpr "xs")
              (TemplateExpr
                (ScopeTraversalExpr "v")
                (LiteralValueExpr " ")
              )
            )
          )
        )
        """
    )


def test_template_may_contain_the_default_heredoc_marker():
    source = "a\nEND_OF_TEMPLATE\nb"
    result = parse_template(source)
    template = result.raise_for_errors()
    assert isinstance(template, TemplateExpr)
    [literal] = template.parts
    assert literal.src_range.slice_bytes(result.source) == source.encode()


def test_conditional_chain_binds_to_the_right():
    result = parse_expression("a ? b : c ? d : e")
    assert dump(result) == expected(
        """
        (ConditionalExpr
          (ScopeTraversalExpr "a")
          (ScopeTraversalExpr "b")
          (ConditionalExpr
            (ScopeTraversalExpr "c")
            (ScopeTraversalExpr "d")
            (ScopeTraversalExpr "e")
          )
        )
        """
    )
    node = result.raise_for_errors()
    assert (node.src_range.start, node.src_range.end) == (0, 17)
    assert node.false_result.src_range.slice_bytes(result.source) == b"c ? d : e"


def test_parenthesized_conditional_condition_is_kept():
    assert dump(parse_expression("(a ? b : c) ? d : e")) == expected(
        """
        (ConditionalExpr
          (ParenthesesExpr
            (ConditionalExpr
              (ScopeTraversalExpr "a")
              (ScopeTraversalExpr "b")
              (ScopeTraversalExpr "c")
            )
          )
          (ScopeTraversalExpr "d")
          (ScopeTraversalExpr "e")
        )
        """
    )


def test_node_ranges_refer_to_the_callers_text():
    """Wrapped inputs report offsets into what the caller passed in."""
    result = parse_expression("a + b")
    node = result.raise_for_errors()
    assert (node.src_range.start, node.src_range.end) == (0, 5)
    assert node.rhs.src_range.slice_bytes(result.source) == b"b"


def test_syntax_error_in_config():
    result = parse_config('resource "a" "b" {\n  name = \n}\n', filename="main.tf")
    assert result.node is None
    assert result.diagnostics.has_errors()
    assert all(str(diag.subject).startswith("main.tf:") for diag in result.diagnostics)


def test_syntax_error_in_expression():
    result = parse_expression("1 +")
    assert result.node is None
    assert result.diagnostics.has_errors()
    assert str(result.diagnostics).startswith("<expr>:")


def test_extra_characters_after_expression():
    result = parse_expression("1\nfoo = 2")
    assert result.node is None
    assert [diag.summary for diag in result.diagnostics] == ["Extra characters after expression"]


def test_attribute_redefined():
    result = parse_config("a = 1\na = 2\n", filename="main.tf")
    assert result.node is None
    [diagnostic] = result.diagnostics
    assert diagnostic.summary == "Attribute redefined"
    assert str(diagnostic.subject).startswith("main.tf:2,1-")
    assert "main.tf:1,1-" in diagnostic.detail


def test_raise_for_errors():
    result = parse_expression("1 +")
    with pytest.raises(HCLSyntaxError) as excinfo:
        result.raise_for_errors()
    assert excinfo.value.diagnostics is result.diagnostics


def test_parse_accepts_text_and_bytes():
    assert dump(parse_expression("true")) == dump(parse_expression(b"true"))
