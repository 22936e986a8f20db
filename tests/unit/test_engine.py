"""
Unit tests for the Jinja2 engine adapter
"""
import jinja2
import pytest

from presenter import ConfigurationError, EngineOptions, PluginType
from presenter.templating import TemplateEngine


@pytest.fixture
def engine(template_dir):
    """Engine over the template directory"""
    return TemplateEngine(EngineOptions(template_dir=str(template_dir)))


class TestTemplateEngine:
    """Test TemplateEngine"""

    def test_fetch(self, engine, template_dir):
        """Test fetching a template with assigned variables"""
        (template_dir / "hello.html").write_text("Hello, {{ name }}!")
        engine.assign("name", "World")
        assert engine.fetch("hello.html") == "Hello, World!"

    def test_undefined_renders_empty(self, engine, template_dir):
        """Test undefined variables are silent"""
        (template_dir / "undefined.html").write_text("[{{ missing }}]")
        assert engine.fetch("undefined.html") == "[]"

    def test_auto_escape(self, engine, template_dir):
        """Test values are escaped by default"""
        (template_dir / "escape.html").write_text("{{ value }}")
        engine.assign("value", "<b>")
        assert engine.fetch("escape.html") == "&lt;b&gt;"

    def test_missing_template_propagates(self, engine):
        """Test engine errors are not wrapped"""
        with pytest.raises(jinja2.TemplateNotFound):
            engine.fetch("nope.html")

    def test_config_dir_on_search_path(self, tmp_path, template_dir):
        """Test templates can be found in the config directory"""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "settings.html").write_text("site={{ site }}")
        engine = TemplateEngine(EngineOptions(template_dir=str(template_dir), config_dir=str(config_dir)))
        engine.assign("site", "demo")
        assert engine.fetch("settings.html") == "site=demo"

    def test_duplicate_plugin(self, engine):
        """Test a plugin name can only be registered once per type"""
        engine.register_plugin(PluginType.FUNCTION, "now", lambda: "x")
        with pytest.raises(ConfigurationError):
            engine.register_plugin(PluginType.FUNCTION, "now", lambda: "y")

    def test_same_name_different_types(self, engine):
        """Test a name may be reused across plugin types"""
        engine.register_plugin(PluginType.FUNCTION, "upper", str.upper)
        engine.register_plugin(PluginType.MODIFIER, "upper", str.upper)
        assert len(engine.plugins) == 2

    def test_unknown_plugin_type(self, engine):
        """Test unknown plugin types are rejected"""
        with pytest.raises(ValueError):
            engine.register_plugin("block", "b", lambda: None)

    def test_clear_cache(self, engine, template_dir):
        """Test removing one template from the cache"""
        (template_dir / "a.html").write_text("a")
        (template_dir / "b.html").write_text("b")
        engine.fetch("a.html")
        engine.fetch("b.html")
        assert len(engine.environment.cache) == 2

        engine.clear_cache("a.html")

        assert len(engine.environment.cache) == 1

    def test_clear_all(self, engine, template_dir):
        """Test clearing cache and assignments"""
        (template_dir / "a.html").write_text("{{ x }}")
        engine.assign("x", 1)
        engine.fetch("a.html")

        engine.clear_all_cache()
        engine.clear_all_assign()

        assert len(engine.environment.cache) == 0
        assert engine.get_template_vars() == {}

    def test_compile_dir(self, tmp_path, template_dir):
        """Test bytecode caching into the compile directory"""
        compile_dir = tmp_path / "compiled"
        (template_dir / "a.html").write_text("a")
        engine = TemplateEngine(EngineOptions(template_dir=str(template_dir), compile_dir=str(compile_dir)))

        assert engine.fetch("a.html") == "a"
        assert any(compile_dir.iterdir())

        engine.clear_all_cache()
        assert not any(compile_dir.iterdir())

    def test_force_compile_disables_caches(self, tmp_path, template_dir):
        """Test force compile turns caching off"""
        engine = TemplateEngine(EngineOptions(
            template_dir=str(template_dir),
            compile_dir=str(tmp_path / "compiled"),
            force_compile=True,
        ))
        assert engine.environment.cache is None
        assert engine.bytecode_cache is None
        engine.clear_cache("anything")
