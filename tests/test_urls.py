import pytest

from httpx_restclient import InvalidArgument, URLBuilder, build_url


class TestAppend(object):
    def test_chained_segments(self):
        url = build_url("yahoo.com").append("a").append("mystore/").append("toodles?index=5")
        assert str(url) == "http://yahoo.com/a/mystore/toodles?index=5"

    def test_messy_slashes(self):
        url = build_url(
            "myhost.com",
            "first/",
            "//second",
            "third/forth/fith",
            "mypage.asp?i=1&b=2&c=3",
        ).set_https(True)
        assert str(url) == "https://myhost.com/first/second/third/forth/fith/mypage.asp?i=1&b=2&c=3"

    def test_https_token_sets_flag_without_segment(self):
        url = build_url("HTTPS://x")
        assert url.https
        assert url.segments == ["x"]
        assert str(url).startswith("https://")

    def test_mixed_case_scheme(self):
        url = build_url("htTPS://citibank.com/secureme/").append("/halp")
        assert str(url) == "https://citibank.com/secureme/halp"

    def test_http_token_is_ignored(self):
        url = build_url("http://me.com/").append("/you/").append("/andi/").append("like/each/ohter/")
        assert str(url) == "http://me.com/you/andi/like/each/ohter"

    def test_http_token_does_not_reset_https(self):
        url = build_url("https://a.com", "http://b")
        assert str(url) == "https://a.com/b"

    def test_blank_segments_are_ignored(self):
        url = build_url("host", "  ", "", "/", "//", " a ")
        assert url.segments == ["host", "a"]
        assert str(url) == "http://host/a"

    @pytest.mark.parametrize(
        "segments",
        [
            ("host", "a", "b"),
            ("HTTP://host/", "/a/", "//b//"),
            ("host", "https://", "Https:", "a"),
            (" http:// ", "host", "/", "a/b/c/"),
            ("hTtPs://host//a", "", "  b  ", "c//d"),
        ],
    )
    def test_single_scheme_and_no_double_slashes(self, segments):
        rendered = str(build_url(*segments))
        assert rendered.count("://") == 1
        _, rest = rendered.split("://", 1)
        assert "//" not in rest
        assert not rest.endswith("/")

    def test_none_segment(self):
        with pytest.raises(InvalidArgument):
            build_url("host").append(None)

    def test_empty_builder(self):
        assert str(URLBuilder()) == "http://"


class TestRender(object):
    def test_without_scheme(self):
        assert str(build_url("host", "a").emit_scheme(False)) == "host/a"

    def test_without_domain(self):
        url = build_url("host", "a", "b").emit_scheme(False).emit_domain(False)
        assert str(url) == "/a/b"

    def test_parameters_keep_insertion_order(self):
        url = build_url("host").add_parameter("a", "1").add_parameter("b", "2")
        assert str(url) == "http://host?a=1&b=2"

    def test_parameters_after_path(self):
        url = build_url("host", "p").add_parameter("a", "1")
        assert str(url) == "http://host/p?a=1"

    def test_duplicate_keys(self):
        url = build_url("host").add_parameter("a", "1").add_parameter("a", "2")
        assert str(url).endswith("?a=1&a=2")

    def test_parameters_are_encoded(self):
        url = build_url("host").add_parameter("q", "a b&c")
        assert str(url) == "http://host?q=a+b%26c"

    @pytest.mark.parametrize("key, value", [(None, "1"), ("a", None)])
    def test_parameter_requires_key_and_value(self, key, value):
        with pytest.raises(InvalidArgument):
            build_url("host").add_parameter(key, value)


class TestCopy(object):
    def test_copy_is_independent(self):
        original = build_url("myhost.net/", "/homepage")
        child = original.copy().append("asdf/adf/reqotwoetiywer").set_https(True)
        child.add_parameter("x", "1")

        assert str(original) == "http://myhost.net/homepage"
        assert str(child) == "https://myhost.net/homepage/asdf/adf/reqotwoetiywer?x=1"

    def test_copy_with_segments(self):
        original = build_url("https://host", "api")
        child = original.copy("v1", "/items/")
        assert str(child) == "https://host/api/v1/items"
        assert str(original) == "https://host/api"

    def test_copy_leaves_parameters_behind(self):
        original = build_url("host").add_parameter("a", "1")
        assert str(original.copy("x")) == "http://host/x"

    def test_mutating_original_leaves_copy_alone(self):
        original = build_url("host", "a")
        child = original.copy()
        original.append("b")
        assert str(child) == "http://host/a"
