import json

from django import template
from django.template.base import token_kwargs
from django.utils.html import escape
from django.utils.safestring import mark_safe

from fallback_images.builder import (
    build_resized_url,
    build_source_set,
    resolve_variant,
    swap_extension,
)
from fallback_images.controller import FallbackController
from fallback_images.request import ImageRequest

register = template.Library()

# Moves the element on to the next URL in data-fallback-srcs, then gives up.
FALLBACK_ONERROR = (
    "var c=JSON.parse(this.dataset.fallbackSrcs),"
    "i=c.indexOf(this.getAttribute('src'));"
    "this.removeAttribute('srcset');"
    "if(i>=0&&i+1<c.length){this.src=c[i+1];}else{this.onerror=null;}"
)


def render_img(
    controller: FallbackController, img_attrs: dict[str, str] | None = None
):
    """Render the ``<img>`` tag for the controller's current candidate."""
    attrs = controller.render_attrs()
    request = controller.request
    # Only density variants make sense as a srcset without a sizes attribute.
    density_variants = [
        resolve_variant(variant, request)
        for variant in request.sizes
        if variant.get("dens")
    ]
    if density_variants and controller.current_url:
        attrs["srcset"] = build_source_set(
            swap_extension(request.src, request.ext), density_variants
        )
    attrs["data-fallback-srcs"] = json.dumps(controller.candidates)
    if len(controller.candidates) > 1:
        attrs["onerror"] = FALLBACK_ONERROR
    for key, value in (img_attrs or {}).items():
        if key and value and key not in attrs:
            attrs[key] = value
    html = " ".join(f'{escape(key)}="{escape(value)}"' for key, value in attrs.items())
    return mark_safe(f"<img {html}>")


class FallbackImgNode(template.Node):
    def __init__(self, src, options, as_var):
        self.src = src
        self.options = options
        self.as_var = as_var

    def render(self, context):
        src = self.src.resolve(context)
        resolved_options = {
            key: value.resolve(context) for key, value in self.options.items()
        }

        request_keys = set(ImageRequest._fields) - {"src"}
        img_attr_keys = {k for k in resolved_options if k.startswith("img_")}
        unknown_keys = set(resolved_options) - request_keys - img_attr_keys
        if unknown_keys:
            raise ValueError(
                "Unknown options passed to 'fallback_img' tag: "
                f"{', '.join(sorted(unknown_keys))}"
            )

        # token_kwargs doesn't allow hyphens, so img_data_id becomes data-id.
        img_attrs = {
            key[4:].replace("_", "-"): str(value)
            for key, value in resolved_options.items()
            if key in img_attr_keys
        }
        for key in img_attr_keys:
            del resolved_options[key]
        controller = FallbackController.from_options(src, **resolved_options)
        output = render_img(controller, img_attrs)

        if self.as_var:
            context[self.as_var] = output
            return ""
        return output


@register.tag
def fallback_img(parser, token):
    """
    Render an ``<img>`` whose source falls back through resized candidates::

        {% fallback_img photo.image alt="A photo" w=400 h=300 sizes="800x600@2x" %}
    """
    bits = token.split_contents()
    if len(bits) < 2:
        raise template.TemplateSyntaxError(f"{bits[0]} tag requires a source")
    src = parser.compile_filter(bits[1])
    options = bits[2:]
    as_var = None
    if len(options) > 1 and options[-2] == "as":
        as_var = options[-1]
        options = options[:-2]
    # token_kwargs consumes the bits it parses, leaving anything it couldn't.
    kwargs = token_kwargs(options, parser)
    if options:
        raise template.TemplateSyntaxError(
            f"{bits[0]} tag options must be given as key=value pairs"
        )
    if "alt" not in kwargs:
        raise template.TemplateSyntaxError(f"{bits[0]} tag requires an alt attribute")
    return FallbackImgNode(src, kwargs, as_var)


@register.simple_tag
def resized_url(src, w=0, h=0, ext=None, dens=None):
    return build_resized_url(
        ImageRequest.parse_src(src),
        ImageRequest.parse_dimension(w, "width"),
        ImageRequest.parse_dimension(h, "height"),
        ImageRequest.parse_ext(ext),
        ImageRequest.parse_density(dens),
    )


@register.simple_tag
def source_set(src, sizes):
    return build_source_set(
        ImageRequest.parse_src(src), ImageRequest.parse_sizes(sizes)
    )
