import pytest

from bilgibite_notify.catalog import DEFAULT_TEMPLATES, register_default_templates
from bilgibite_notify.errors import TemplateNotFoundError
from bilgibite_notify.models import Template
from bilgibite_notify.templates import TemplateStore, render_template


def _store_with(template: Template) -> TemplateStore:
    store = TemplateStore()
    store.register(template.name, template)
    return store


def test_render_leaves_unknown_placeholders_untouched():
    store = _store_with(Template("greet", "Hi {{name}}", "<p>Hi {{name}}</p>", "Hi {{name}}"))

    rendered = store.render("greet", {})

    assert rendered.subject == "Hi {{name}}"
    assert rendered.html_body == "<p>Hi {{name}}</p>"
    assert rendered.text_body == "Hi {{name}}"


def test_render_replaces_every_occurrence_in_all_fields():
    template = Template("plan", "{{plan}} / {{plan}}", "<b>{{plan}}</b>{{plan}}", "{{plan}}-{{price}}")

    rendered = render_template(template, {"plan": "Pro", "price": 49})

    assert rendered.subject == "Pro / Pro"
    assert rendered.html_body == "<b>Pro</b>Pro"
    assert rendered.text_body == "Pro-49"


def test_render_treats_keys_literally():
    template = Template("odd", "{{a.b}} {{a+b}}", "", "")

    rendered = render_template(template, {"a.b": "dot", "a+b": "plus"})

    assert rendered.subject == "dot plus"


def test_render_unknown_name_raises():
    store = TemplateStore()
    with pytest.raises(TemplateNotFoundError) as excinfo:
        store.render("missing", {})
    assert "missing" in str(excinfo.value)


def test_register_twice_is_rejected():
    template = Template("greet", "Hi", "", "")
    store = _store_with(template)
    with pytest.raises(ValueError):
        store.register("greet", template)


def test_default_catalog_registers_billing_templates():
    store = register_default_templates(TemplateStore())

    assert store.names() == [t.name for t in DEFAULT_TEMPLATES]
    assert "payment-failed" in store
    rendered = store.render("subscription-activated", {"planName": "Premium", "userName": "Ayşe"})
    assert rendered.subject == "🎉 BilgiBite Premium aboneliğiniz aktif!"
    assert "Merhaba Ayşe," in rendered.text_body
    assert "{{appUrl}}" in rendered.html_body
