from pathlib import Path

from conftest import parse_go
from gen_interface.config import GenerationConfig
from gen_interface.gofmt import check_syntax
from gen_interface.model import build_units
from gen_interface.render import render_interface
from gen_interface.source import load_source

USER_DAO_INTERFACE = """\
package dao

// IUserDao is the interface definition for UserDao.
type IUserDao interface {
\t// CreateUser inserts a user.
\tCreateUser(name string) error
\tGetUser(id int64) (*User, error)
}
"""

USER_DAO_REGISTER = """\

var (
\tlocalIUserDao IUserDao
)

func UserDao() IUserDao {
\tif localIUserDao == nil {
\t\tpanic("implement not found for interface IUserDao, forgot register?")
\t}
\treturn localIUserDao
}

func RegisterUserDao(impl IUserDao) {
\tlocalIUserDao = impl
}
"""


def render_fixture(fixtures_dir: Path, rel: str, **options) -> str:
    unit = load_source(fixtures_dir / rel)
    config = GenerationConfig.create(gofmt_command=None, **options)
    (synth,) = build_units(unit, config, "dao", Path(rel).name)
    return render_interface(synth)


def test_user_dao_default_configuration(fixtures_dir: Path):
    assert render_fixture(fixtures_dir, "dao/user_dao.go") == USER_DAO_INTERFACE


def test_user_dao_with_registration_glue(fixtures_dir: Path):
    text = render_fixture(fixtures_dir, "dao/user_dao.go", generate_register=True)
    assert text == USER_DAO_INTERFACE.rstrip("\n") + "\n" + USER_DAO_REGISTER


def test_mock_directive_precedes_interface_declaration(fixtures_dir: Path):
    text = render_fixture(fixtures_dir, "dao/user_dao.go", generate_mock=True, mock_path="../mocks")
    lines = text.splitlines()
    type_index = lines.index("type IUserDao interface {")
    assert lines[type_index - 1] == (
        "//go:generate mockgen -source=user_dao.go -destination=../mocks/user_dao.go -package=mocks"
    )
    assert lines[type_index - 3] == "// IUserDao is the interface definition for UserDao."
    assert text.count("//go:generate") == 1


def test_imports_rendered_sorted_with_aliases(fixtures_dir: Path):
    text = render_fixture(fixtures_dir, "dao/order_dao.go")
    assert text.startswith(
        "package dao\n\n"
        "import (\n"
        '\t"context"\n'
        '\tm "example.com/shop/model"\n'
        '\t"example.com/shop/pkg/paging"\n'
        ")\n\n"
    )
    assert '"strings"' not in text
    assert '"time"' not in text


def test_method_lines_and_multiline_docs(fixtures_dir: Path):
    text = render_fixture(fixtures_dir, "dao/order_dao.go")
    body = text[text.index("type IOrderDao interface {"):]
    assert body == (
        "type IOrderDao interface {\n"
        "\t// ListOrders returns orders for a user.\n"
        "\t//\n"
        "\t// Results are ordered by creation time.\n"
        "\tListOrders(ctx context.Context, userID int64, opts ...Option) ([]*m.Order, error)\n"
        "\t// CountOrders counts orders by status.\n"
        "\tCountOrders(ctx context.Context, byStatus map[string][]*m.Order) (total int, err error)\n"
        "\tWatch(ctx context.Context, filter func(m.Order) bool) <-chan m.Event\n"
        "\tPage(ctx context.Context, p paging.Request) (*paging.Result, error)\n"
        "\tAnnotate(key string, value string, extra interface{})\n"
        "\tClose()\n"
        "}\n"
    )


def test_lower_methods_never_rendered(fixtures_dir: Path):
    text = render_fixture(fixtures_dir, "dao/order_dao.go")
    assert "normalize" not in text
    text = render_fixture(fixtures_dir, "dao/user_dao.go")
    assert "scan" not in text


def test_rendering_is_deterministic(fixtures_dir: Path):
    first = render_fixture(fixtures_dir, "dao/order_dao.go", generate_register=True, generate_mock=True)
    second = render_fixture(fixtures_dir, "dao/order_dao.go", generate_register=True, generate_mock=True)
    assert first == second


def test_rendered_output_is_valid_go(fixtures_dir: Path):
    for rel in ("dao/user_dao.go", "dao/order_dao.go"):
        text = render_fixture(fixtures_dir, rel, generate_register=True, generate_mock=True)
        check_syntax(text, rel)


def test_unused_source_import_does_not_change_output():
    body = (
        "type ADao struct{}\n\n"
        "func (a *ADao) Get(ctx context.Context) error { return nil }\n"
    )
    with_extra = parse_go('package p\n\nimport (\n\t"context"\n\t"strings"\n)\n\n' + body)
    without = parse_go('package p\n\nimport "context"\n\n' + body)
    config = GenerationConfig.create(gofmt_command=None)

    rendered = [render_interface(build_units(u, config, "p", "a.go")[0]) for u in (with_extra, without)]
    assert rendered[0] == rendered[1]
