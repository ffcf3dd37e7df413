"""Tests for text and shape nodes."""
from conftest import BLACK, group, image_rect, rect, text

from flutter_export.context import Context, ContextTarget
from flutter_export.decorators import OnTap
from flutter_export.nodes import Group, Shape, Text
from flutter_export.nodes.text import get_text_style, get_text_style_param_list
from flutter_export.parameter import ParamType
from flutter_export.proptype import ProjectProps


def _serialize(cls, source, ctx):
    node = cls(source, ctx)
    node.layout = None
    return node.serialize(ctx)


class TestText:

    def test_plain(self, ctx):
        assert _serialize(Text, text('t', 'Hi'), ctx) == (
            "Text('Hi', style: TextStyle(fontFamily: 'Roboto', fontSize: 14.0, "
            "color: const Color(0xff000000), ), )")

    def test_auto_width_does_not_wrap(self, ctx):
        result = _serialize(Text, text('t', 'Hi', textAutoResize='WIDTH_AND_HEIGHT'), ctx)
        assert result.endswith('softWrap: false, )')

    def test_escaping(self, ctx):
        assert _serialize(Text, text('t', "it's $5\r\nok"), ctx).startswith("Text('it\\'s \\$5\\nok', ")

    def test_text_param(self, ctx):
        node = Text(text('t', 'Hi', pluginData={'textParamName': 'label'}), ctx)
        param = node.get_param('text')
        assert (param.name, param.type, param.value) == ('label', ParamType.TEXT, "'Hi'")
        node.layout = None
        assert node.serialize(ctx).startswith('Text(label, ')

    def test_color_param(self, ctx):
        node = Text(text('t', 'Hi', pluginData={'colorParamName': 'tint'}), ctx)
        assert node.get_param('color').value == 'const Color(0xff000000)'
        node.layout = None
        assert 'color: tint, ' in node.serialize(ctx)

    def test_gradient_fill_uses_first_stop(self, ctx):
        fill = {'type': 'GRADIENT_LINEAR', 'visible': True, 'gradientStops': [
            {'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}, 'position': 0},
            {'color': {'r': 0, 'g': 1, 'b': 0, 'a': 1}, 'position': 1},
        ]}
        result = _serialize(Text, text('t', 'Hi', fills=[fill]), ctx)
        assert 'color: const Color(0xffff0000), ' in result
        assert [e.message for e in ctx.log.warnings] == ["Only solid color fills are supported for text."]

    def test_flutter_font(self, ctx):
        result = _serialize(Text, text('t', 'Hi', pluginData={'flutterFont': 'Inter'}), ctx)
        assert "fontFamily: 'Inter', " in result


class TestTextStyle:

    def test_full_style(self):
        style = {
            'fontFamily': 'Roboto', 'fontSize': 14, 'letterSpacing': 1.5, 'fontWeight': 600,
            'italic': True, 'lineHeightPx': 21, 'textDecoration': 'UNDERLINE',
        }
        assert get_text_style_param_list(style, 'Colors.red') == (
            "fontFamily: 'Roboto', fontSize: 14.0, color: Colors.red, letterSpacing: 1.5, "
            "fontWeight: FontWeight.w600, fontStyle: FontStyle.italic, height: 1.5, "
            "decoration: TextDecoration.underline, ")

    def test_regular_weight_is_omitted(self):
        assert 'fontWeight' not in get_text_style_param_list({'fontWeight': 400})

    def test_empty(self):
        assert get_text_style(get_text_style_param_list({})) == ''


class TestBoxShape:

    def test_solid(self, ctx):
        assert _serialize(Shape, rect('r'), ctx) == (
            'Container(decoration: BoxDecoration(color: const Color(0xff0000ff), ), )')

    def test_corner_radius(self, ctx):
        assert 'borderRadius: BorderRadius.circular(8.0), ' in _serialize(Shape, rect('r', cornerRadius=8), ctx)

    def test_mixed_corner_radii(self, ctx):
        result = _serialize(Shape, rect('r', cornerRadius=4, rectangleCornerRadii=[1, 2, 3, 4]), ctx)
        assert ('borderRadius: BorderRadius.only(topLeft: Radius.circular(1.0), topRight: Radius.circular(2.0), '
                'bottomRight: Radius.circular(3.0), bottomLeft: Radius.circular(4.0), ), ') in result

    def test_ellipse(self, ctx):
        result = _serialize(Shape, rect('e', 0, 0, 40, 20, type='ELLIPSE'), ctx)
        assert 'borderRadius: BorderRadius.all(Radius.elliptical(20.0, 10.0)), ' in result

    def test_border(self, ctx):
        result = _serialize(Shape, rect('r', strokes=[BLACK], strokeWeight=2), ctx)
        assert 'border: Border.all(width: 2.0, color: const Color(0xff000000), ), ' in result

    def test_drop_shadow(self, ctx):
        shadow = {'type': 'DROP_SHADOW', 'visible': True, 'radius': 8,
                  'color': {'r': 0, 'g': 0, 'b': 0, 'a': 0.25}, 'offset': {'x': 0, 'y': 4}}
        result = _serialize(Shape, rect('r', effects=[shadow]), ctx)
        assert ('boxShadow: [BoxShadow(color: const Color(0x40000000), offset: Offset(0.0, 4.0), '
                'blurRadius: 8.0, ), ], ') in result

    def test_gradient(self, ctx, node_with_radial_gradient):
        assert 'gradient: RadialGradient(center: Alignment(0.0, 0.0), ' in _serialize(
            Shape, node_with_radial_gradient, ctx)

    def test_image(self, ctx):
        result = _serialize(Shape, image_rect('r', 'abcdef123456'), ctx)
        assert ("image: DecorationImage(image: const AssetImage('assets/images/photo_abcdef.png'), "
                "fit: BoxFit.cover, ), ") in result
        assert ctx.images == {'assets/images/photo_abcdef.png': 'abcdef123456'}
        assert ctx.image_files == ['assets/images/photo_abcdef.png']

    def test_resolution_aware_image_files(self):
        ctx = Context(ContextTarget.CLIPBOARD, ProjectProps(resolution_aware=True))
        _serialize(Shape, image_rect('r', 'abcdef123456'), ctx)
        assert ctx.image_files == ['assets/images/photo_abcdef.png', 'assets/images/2.0x/photo_abcdef.png',
                                   'assets/images/3.0x/photo_abcdef.png']

    def test_image_param(self, ctx):
        node = Shape(image_rect('r', 'abcdef123456', pluginData={'imageParamName': 'avatar'}), ctx)
        param = node.get_param('fill')
        assert param.type == ParamType.IMAGE
        assert param.value == "const AssetImage('assets/images/photo_abcdef.png')"
        node.layout = None
        assert 'image: DecorationImage(image: avatar, ' in node.serialize(ctx)

    def test_image_fill_name(self, ctx):
        result = _serialize(Shape, image_rect('r', 'abcdef123456', pluginData={'imageFillName': 'hero'}), ctx)
        assert "AssetImage('assets/images/hero.png')" in result


class TestVectorShape:

    def _vector(self, **extra):
        return rect('v', 0, 0, 10, 10, type='VECTOR', **extra)

    def test_svg(self, ctx):
        source = self._vector(fillGeometry=[{'path': 'M0 0L10 0L10 10Z', 'windingRule': 'EVENODD'}])
        ctx.push_imports()
        result = _serialize(Shape, source, ctx)
        assert result == (
            "SvgPicture.string('<svg viewBox=\"0 0 10.0 10.0\"><path d=\"M0 0L10 0L10 10Z\" fill=\"#0000ff\" "
            "fill-rule=\"evenodd\"/></svg>', allowDrawingOutsideViewBox: true, fit: BoxFit.fill, )")
        assert ctx.pop_imports() == ['package:flutter_svg/flutter_svg.dart']

    def test_stroke_paths(self, ctx):
        source = self._vector(fills=[], strokes=[BLACK],
                              strokeGeometry=[{'path': 'M0 0L10 10'}])
        assert '<path d="M0 0L10 10" fill="#000000"/>' in _serialize(Shape, source, ctx)

    def test_no_paths(self, ctx):
        assert _serialize(Shape, self._vector(), ctx) == ''
        assert [e.message for e in ctx.log.warnings] == ["Shape has no path data and was not exported."]


class TestDecorateOnly:

    def test_box_emits_bare_decoration(self, ctx):
        node = Shape(rect('r', 10, 10, 50, 50, cornerRadius=4, pluginData={'decorateOnly': True}), ctx)
        node.parent = Group(group('g', []), ctx)
        node.add_decorator(OnTap(node, ctx))
        assert node.serialize(ctx) == ('BoxDecoration(color: const Color(0xff0000ff), '
                                       'borderRadius: BorderRadius.circular(4.0), )')

    def test_fills_a_custom_slot(self, ctx):
        panel = group('g', [rect('r', pluginData={'decorateOnly': True, 'customSlot': 'decoration'})],
                      pluginData={'isCustomWidget': True, 'customWidget': 'DecoratedBox'})
        node = Group(panel, ctx)
        node.children = [Shape(panel['children'][0], ctx)]
        node.children[0].parent = node
        assert node._get_child_stack(ctx) == ('DecoratedBox( decoration: BoxDecoration('
                                              'color: const Color(0xff0000ff), ))')

    def test_vectors_warn(self, ctx):
        source = rect('v', 0, 0, 10, 10, type='VECTOR', pluginData={'decorateOnly': True},
                      fillGeometry=[{'path': 'M0 0L10 10'}])
        assert _serialize(Shape, source, ctx).startswith('SvgPicture.string(')
        assert [e.message for e in ctx.log.warnings] == ["Only rectangles and ellipses can export decorations only."]


class TestCombineShapes:

    def _group(self, ctx, children):
        source = group('g', [c.source for c in children], 100, 100, 40, 40, pluginData={'combineShapes': True})
        node = Group(source, ctx)
        node.layout = None
        node.children = children
        return node

    def test_one_svg_for_all_shapes(self, ctx):
        first = Shape(rect('a', 100, 100, 10, 10, type='VECTOR', fillGeometry=[{'path': 'M0 0L10 10'}]), ctx)
        inner = Group(group('i', [], 120, 110, 20, 20), ctx)
        inner.children = [Shape(rect('b', 120, 110, 20, 20, type='ELLIPSE', fills=[BLACK],
                                     fillGeometry=[{'path': 'M0 0Z'}]), ctx)]
        ctx.push_imports()
        result = self._group(ctx, [first, inner]).serialize(ctx)
        assert result == (
            "SvgPicture.string('<svg viewBox=\"0 0 40.0 40.0\">"
            "<g transform=\"translate(0.0 0.0)\"><path d=\"M0 0L10 10\" fill=\"#0000ff\"/></g>"
            "<g transform=\"translate(20.0 10.0)\"><path d=\"M0 0Z\" fill=\"#000000\"/></g>"
            "</svg>', allowDrawingOutsideViewBox: true, fit: BoxFit.fill, )")
        assert ctx.pop_imports() == ['package:flutter_svg/flutter_svg.dart']

    def test_other_layers_are_left_out(self, ctx):
        label = Text(text('t', 'Hi'), ctx)
        assert self._group(ctx, [label]).serialize(ctx) == ''
        assert [e.message for e in ctx.log.warnings] == [
            "Only shapes can be combined, this layer was left out.", "Group has no shapes to combine."]
