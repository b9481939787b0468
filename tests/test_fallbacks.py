import pytest

from core.exceptions import InvalidArgument
from fallbacks.icon_services import ICON_SERVICES, duckduckgo, google, yandex, allesedv, get_fallback
from models.fallback import ComputedFallback, ConstantFallback, make_fallback
from rules.rules_loader import load_icon_services


def test_builtin_icon_services():
    assert duckduckgo("reactome.org") == "https://icons.duckduckgo.com/ip3/reactome.org.ico"
    assert google("reactome.org") == "https://www.google.com/s2/favicons?domain_url=reactome.org"
    assert yandex("reactome.org") == "https://favicon.yandex.net/favicon/reactome.org"
    assert allesedv("reactome.org") == "https://f1.allesedv.com/32/reactome.org"


def test_get_fallback_by_name():
    assert get_fallback("google") is google
    with pytest.raises(InvalidArgument):
        get_fallback("altavista")


def test_make_fallback_variants():
    assert make_fallback("https://example.com/x.ico") == ConstantFallback("https://example.com/x.ico")
    assert make_fallback(google) == ComputedFallback(google)
    assert make_fallback(ConstantFallback("a")).apply("server") == "a"
    assert make_fallback(lambda server: server.upper()).apply("abc") == "ABC"


def test_make_fallback_accepts_single_argument_callable_object():
    class Service:
        def __call__(self, server):
            return f"https://icons.example/{server}"

    assert make_fallback(Service()).apply("a.org") == "https://icons.example/a.org"


def test_load_icon_services_from_yaml(tmp_path):
    (tmp_path / "custom.yaml").write_text(
        "- name: mine\n"
        "  template: 'https://icons.example/{server}.png'\n"
        "- name: broken\n"
        "  template: 'https://icons.example/static.png'\n"
        "- template: 'https://no-name/{server}'\n"
    )
    (tmp_path / "notes.txt").write_text("ignored")

    services = load_icon_services(str(tmp_path))

    assert list(services) == ["mine"]
    assert services["mine"].url_for("a.org") == "https://icons.example/a.org.png"


def test_default_icon_services_file():
    assert {"duckduckgo", "google", "yandex", "allesedv"} <= set(ICON_SERVICES)
