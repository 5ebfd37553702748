import pytest

from unilager.deps import (
    Deps,
    MissingDependencyError,
    Spec,
    fn,
    get,
    has,
    is_deps,
    key,
    make_deps,
    opt,
    val,
)


class Database:
    def __init__(self, name):
        self.name = name


class Logger:
    pass


class UserDb:
    pass


class PostDb:
    pass


def test_make_deps_keys_by_type():
    log = Logger()
    d = make_deps(log, "text")
    assert d.get(Logger) is log
    assert d.get(str) == "text"


def test_make_deps_duplicate_types_rejected():
    with pytest.raises(ValueError):
        make_deps("a", "b")


def test_with_values_with_keys_disambiguates():
    udb, pdb, log = Database("users"), Database("posts"), Logger()
    d = Deps.with_values(
        [key(UserDb, Database), key(PostDb, Database), Logger], udb, pdb, log
    )
    assert d.get(UserDb) is udb
    assert d.get(PostDb) is pdb
    assert d.get(Logger) is log


def test_with_values_requires_each_value():
    with pytest.raises(TypeError):
        Deps.with_values([Logger, str], Logger())


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        Deps.with_values([Database, Database], Database("a"), Database("b"))


def test_optional_missing():
    d = Deps.with_values([opt(Logger)], None)
    assert d.has(Logger) is False
    with pytest.raises(MissingDependencyError):
        d.get(Logger)


def test_optional_present():
    log = Logger()
    d = Deps.with_values([opt(Logger)], log)
    assert d.has(Logger) is True
    assert d.get(Logger) is log


def test_required_always_has():
    d = make_deps(Logger())
    assert d.has(Logger) is True


def test_undeclared_key():
    with pytest.raises(KeyError):
        Deps().get(Logger)


def test_fn_is_called_on_each_get():
    calls = []

    def provide():
        calls.append(1)
        return len(calls)

    d = Deps.with_values([fn(int)], provide)
    assert d.get(int) == 1
    assert d.get(int) == 2


def test_fn_requires_callable():
    with pytest.raises(TypeError):
        Deps.with_values([fn(int)], 5)


def test_project_subset():
    udb, log = Database("users"), Logger()
    d = Deps.with_values([key(UserDb, Database), Logger], udb, log)
    sub = d.project(key(UserDb, Database))
    assert sub.get(UserDb) is udb
    assert Logger not in sub


def test_project_missing_required():
    d = make_deps(Logger())
    with pytest.raises(MissingDependencyError):
        d.project(str)


def test_project_optional_source_cannot_satisfy_required():
    d = Deps.with_values([opt(Logger)], Logger())
    with pytest.raises(MissingDependencyError):
        d.project(Logger)


def test_project_optional_absent_from_source():
    d = make_deps(Logger())
    sub = d.project(Logger, opt(str))
    assert sub.has(str) is False
    assert sub.has(Logger) is True


def test_project_optional_from_required():
    d = make_deps("text")
    sub = d.project(opt(str))
    assert sub.get(str) == "text"


def test_project_fn_to_value_calls_provider():
    d = Deps.with_values([fn(str)], lambda: "made")
    sub = d.project(str)
    assert sub.get(str) == "made"


def test_project_value_to_fn_rejected():
    d = make_deps("text")
    with pytest.raises(TypeError):
        d.project(fn(str))


def test_merge_union_and_precedence():
    a = Deps.with_values([str, int], "first", 1)
    b = Deps.with_values([str, Logger], "second", Logger())
    m = a.merge(b)
    assert m.get(str) == "second"
    assert m.get(int) == 1
    assert isinstance(m.get(Logger), Logger)
    assert len(m) == 3


def test_merge_takes_spec_from_other():
    a = make_deps("text")
    b = Deps.with_values([opt(str)], None)
    assert a.merge(b).has(str) is False


def test_free_get_and_has():
    log = Logger()
    d = make_deps(log)
    assert get(d, Logger) is log
    assert has(d, Logger) is True


def test_is_deps():
    assert is_deps(Deps()) is True
    assert is_deps({"a": 1}) is False


def test_spec_builders():
    assert val(Logger) == Spec(Logger)
    assert opt(key(UserDb, Database)) == Spec(UserDb, required=False)
    assert fn(opt(str)) == Spec(str, required=False, provided=True)
    with pytest.raises(TypeError):
        val(opt(Logger))