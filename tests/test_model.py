from pathlib import Path

from conftest import parse_go
from gen_interface.config import GenerationConfig
from gen_interface.model import build_units, to_snake_case, upper_first
from gen_interface.source import load_source


def test_naming_helpers():
    assert upper_first("userDao") == "UserDao"
    assert upper_first("") == ""
    assert to_snake_case("UserDao") == "user_dao"
    assert to_snake_case("AuditLogDao") == "audit_log_dao"


def test_builds_unit_for_matching_struct(fixtures_dir: Path, config: GenerationConfig):
    unit = load_source(fixtures_dir / "dao" / "user_dao.go")
    units = build_units(unit, config, "dao", "user_dao.go")

    assert len(units) == 1
    synth = units[0]
    assert synth.name == "UserDao"
    assert synth.interface_name == "IUserDao"
    assert synth.capitalized_name == "UserDao"
    assert synth.package_name == "dao"
    assert synth.target_file_name == "user_dao.go"
    assert [m.name for m in synth.methods] == ["CreateUser", "GetUser"]
    assert synth.imports == []
    assert not synth.generate_register
    assert not synth.generate_mock
    assert synth.mock_path == "../mocks"


def test_only_necessary_imports_are_kept(fixtures_dir: Path, config: GenerationConfig):
    unit = load_source(fixtures_dir / "dao" / "order_dao.go")
    (synth,) = build_units(unit, config, "dao", "order_dao.go")
    assert [(i.name, i.path) for i in synth.imports] == [
        ("", "context"),
        ("m", "example.com/shop/model"),
        ("", "example.com/shop/pkg/paging"),
    ]


def test_non_matching_and_method_less_structs_are_skipped(fixtures_dir: Path, config: GenerationConfig):
    unit = load_source(fixtures_dir / "dao" / "cache_dao.go")
    # cacheDao matches but has no exported methods; Config does not match
    assert build_units(unit, config, "dao", "cache_dao.go") == []


def test_pattern_is_anchored():
    unit = parse_go(
        "package p\n\n"
        "type UserDaoImpl struct{}\n\n"
        "func (u *UserDaoImpl) Run() {}\n"
    )
    assert build_units(unit, GenerationConfig.create(gofmt_command=None), "p", "a.go") == []
    custom = GenerationConfig.create(struct_name_pattern="User", gofmt_command=None)
    assert build_units(unit, custom, "p", "a.go") == []
    custom = GenerationConfig.create(struct_name_pattern="User.*", gofmt_command=None)
    assert [u.name for u in build_units(unit, custom, "p", "a.go")] == ["UserDaoImpl"]


def test_lower_case_struct_gets_capitalized_names():
    unit = parse_go("package p\n\ntype orderDao struct{}\n\nfunc (o orderDao) Load() error { return nil }\n")
    config = GenerationConfig.create(interface_prefix="Api", generate_register=True, gofmt_command=None)
    (synth,) = build_units(unit, config, "p", "order.go")
    assert synth.interface_name == "ApiOrderDao"
    assert synth.capitalized_name == "OrderDao"
    assert synth.generate_register


def test_several_structs_in_one_file_get_distinct_targets(fixtures_dir: Path, config: GenerationConfig):
    unit = load_source(fixtures_dir / "multi" / "stores.go")
    units = build_units(unit, config, "multi", "stores.go")
    assert [(u.interface_name, u.target_file_name) for u in units] == [
        ("IAccountDao", "stores_account_dao.go"),
        ("IAuditLogDao", "stores_audit_log_dao.go"),
    ]


def test_build_does_not_mutate_compilation_unit(fixtures_dir: Path, config: GenerationConfig):
    unit = load_source(fixtures_dir / "dao" / "order_dao.go")
    before = (list(unit.imports), list(unit.types), list(unit.methods))
    build_units(unit, config, "dao", "order_dao.go")
    assert (unit.imports, unit.types, unit.methods) == before
