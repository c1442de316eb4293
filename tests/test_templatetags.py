from types import SimpleNamespace

import pytest
from django.template import Context, Template, TemplateSyntaxError
from django.utils.html import escape

from fallback_images.templatetags.fallback_images import FALLBACK_ONERROR

CANDIDATES_ATTR = (
    'data-fallback-srcs="[&quot;/img/photo__100x50.webp&quot;, '
    '&quot;/img/photo.webp&quot;]"'
)
ONERROR_ATTR = f'onerror="{escape(FALLBACK_ONERROR)}"'


def render(template_string, **context):
    template = Template("{% load fallback_images %}" + template_string)
    return template.render(Context(context)).strip()


def test_fallback_img():
    rendered = render(
        '{% fallback_img src alt="Photo" w=100 h=50 %}', src="/img/photo.jpg"
    )
    assert rendered == (
        '<img src="/img/photo__100x50.webp" alt="Photo" width="100" height="50" '
        f'loading="lazy" data-generation="1" {CANDIDATES_ATTR} {ONERROR_ATTR}>'
    )


def test_fallback_img_field_file():
    rendered = render(
        '{% fallback_img photo.image alt="Photo" ext=None loading="eager" %}',
        photo=SimpleNamespace(image=SimpleNamespace(url="/media/photo.png")),
    )
    assert rendered == (
        '<img src="/media/photo.png" alt="Photo" loading="eager" '
        'data-generation="1" data-fallback-srcs="[&quot;/media/photo.png&quot;]">'
    )


def test_fallback_img_density_srcset():
    rendered = render(
        '{% fallback_img src alt="" w=100 h=50 sizes="200x100@2x,100x50:avif" %}',
        src="/img/photo.jpg",
    )
    assert 'srcset="/img/photo__200x100.webp 2x"' in rendered
    assert (
        'data-fallback-srcs="[&quot;/img/photo__100x50.webp&quot;, '
        "&quot;/img/photo__200x100.webp&quot;, "
        "&quot;/img/photo__100x50.avif&quot;, "
        '&quot;/img/photo.webp&quot;]"'
    ) in rendered


def test_fallback_img_srcset_matches_candidates():
    # With the source extension kept, variants still fall back to webp.
    rendered = render(
        '{% fallback_img src alt="" w=100 h=50 ext=None sizes="200x100@2x,x25@3x" %}',
        src="/img/photo.jpg",
    )
    assert (
        'srcset="/img/photo__200x100.webp 2x, /img/photo__100x25.webp 3x"'
    ) in rendered
    assert (
        'data-fallback-srcs="[&quot;/img/photo__100x50.jpg&quot;, '
        "&quot;/img/photo__200x100.webp&quot;, "
        "&quot;/img/photo__100x25.webp&quot;, "
        '&quot;/img/photo.jpg&quot;]"'
    ) in rendered


def test_fallback_img_onerror_walks_candidates():
    rendered = render('{% fallback_img src alt="" w=100 h=50 %}', src="/img/photo.jpg")
    assert ONERROR_ATTR in rendered
    assert "this.dataset.fallbackSrcs" in FALLBACK_ONERROR
    assert "this.src=c[i+1]" in FALLBACK_ONERROR
    # Stops handling errors once the list runs out.
    assert "this.onerror=null" in FALLBACK_ONERROR


def test_fallback_img_single_candidate_has_no_onerror():
    rendered = render('{% fallback_img src alt="" %}', src="/img/photo.webp")
    assert "onerror" not in rendered


def test_fallback_img_escapes_alt():
    rendered = render('{% fallback_img src alt=alt %}', src="/a.jpg", alt='"<b>"')
    assert 'alt="&quot;&lt;b&gt;&quot;"' in rendered


def test_fallback_img_attrs():
    rendered = render(
        '{% fallback_img src alt="Photo" w=100 h=50 img_class="hero" img_data_id=7 %}',
        src="/img/photo.jpg",
    )
    assert rendered.endswith(
        f'{CANDIDATES_ATTR} {ONERROR_ATTR} class="hero" data-id="7">'
    )


def test_fallback_img_as_variable():
    template = Template(
        "{% load fallback_images %}"
        '{% fallback_img src alt="Photo" w=100 h=50 as photo_img %}'
        "<p>{{ photo_img }}</p>"
    )
    context = Context({"src": "/img/photo.jpg"})
    rendered = template.render(context)
    assert rendered.startswith('<p><img src="/img/photo__100x50.webp"')
    assert "photo_img" in context


def test_fallback_img_missing_alt():
    with pytest.raises(TemplateSyntaxError, match="tag requires an alt attribute"):
        render("{% fallback_img src w=100 %}", src="/a.jpg")


def test_fallback_img_missing_source():
    with pytest.raises(TemplateSyntaxError, match="tag requires a source"):
        render("{% fallback_img %}")


def test_fallback_img_positional_option():
    with pytest.raises(TemplateSyntaxError, match="key=value pairs"):
        render('{% fallback_img src "oops" alt="" %}', src="/a.jpg")


def test_fallback_img_unknown_option():
    with pytest.raises(
        ValueError, match="Unknown options passed to 'fallback_img' tag: colour"
    ):
        render('{% fallback_img src alt="" colour="red" %}', src="/a.jpg")


def test_fallback_img_invalid_option():
    with pytest.raises(ValueError, match="Invalid width value"):
        render('{% fallback_img src alt="" w="wide" %}', src="/a.jpg")


def test_resized_url():
    assert (
        render('{% resized_url "/img/photo.jpg" 100 50 ext="avif" %}')
        == "/img/photo__100x50.avif"
    )
    assert render('{% resized_url "/img/photo.jpg" %}') == "/img/photo.jpg"
    assert (
        render('{% resized_url "/img/photo.jpg" 100 50 dens=2 %}')
        == "/img/photo__100x50.jpg 2x"
    )


def test_source_set():
    assert (
        render('{% source_set "/a/b.png" "50x50,100x100:avif" %}')
        == "/a/b__50x50.png, /a/b__100x100.avif"
    )
    assert render('{% source_set "/a/b.png" sizes %}', sizes=[]) == ""
