"""Shared test fixtures: Figma-shaped node dicts and small documents."""
import pytest

from flutter_export.context import Context, ContextTarget


WHITE = {'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}, 'opacity': 1}
BLACK = {'type': 'SOLID', 'visible': True, 'color': {'r': 0, 'g': 0, 'b': 0, 'a': 1}, 'opacity': 1}
BLUE = {'type': 'SOLID', 'visible': True, 'color': {'r': 0, 'g': 0, 'b': 1, 'a': 1}, 'opacity': 1}


def box(x, y, width, height):
    return {'x': x, 'y': y, 'width': width, 'height': height}


def text(node_id, characters, x=0, y=0, width=100, height=20, **extra):
    node = {
        'id': node_id,
        'name': 'Label',
        'type': 'TEXT',
        'absoluteBoundingBox': box(x, y, width, height),
        'characters': characters,
        'style': {'fontFamily': 'Roboto', 'fontSize': 14, 'fontWeight': 400},
        'fills': [BLACK],
        'effects': [],
    }
    node.update(extra)
    return node


def rect(node_id, x=0, y=0, width=50, height=50, **extra):
    node = {
        'id': node_id,
        'name': 'Box',
        'type': 'RECTANGLE',
        'absoluteBoundingBox': box(x, y, width, height),
        'fills': [BLUE],
        'strokes': [],
        'effects': [],
    }
    node.update(extra)
    return node


def image_rect(node_id, image_ref, x=0, y=0, width=48, height=24, **extra):
    return rect(node_id, x, y, width, height, name='Photo',
                fills=[{'type': 'IMAGE', 'visible': True, 'imageRef': image_ref, 'scaleMode': 'FILL'}], **extra)


def group(node_id, children, x=0, y=0, width=100, height=100, **extra):
    node = {
        'id': node_id,
        'name': 'Group',
        'type': 'GROUP',
        'absoluteBoundingBox': box(x, y, width, height),
        'children': children,
    }
    node.update(extra)
    return node


def artboard(node_id, name, children, width=375, height=812, x=0, y=0, **extra):
    node = {
        'id': node_id,
        'name': name,
        'type': 'ARTBOARD',
        'absoluteBoundingBox': box(x, y, width, height),
        'fills': [WHITE],
        'children': children,
    }
    node.update(extra)
    return node


def document(*nodes, plugin_data=None, assets=None):
    root = {
        'id': '0:0',
        'name': 'Document',
        'type': 'DOCUMENT',
        'children': [{'id': '0:1', 'name': 'Page 1', 'type': 'CANVAS', 'children': list(nodes)}],
    }
    if plugin_data is not None:
        root['pluginData'] = plugin_data
    if assets is not None:
        root['assets'] = assets
    return root


def grid(node_id, rows, width=100, height=300, cell=(48, 24), padding=(4, 10), **extra):
    node = {
        'id': node_id,
        'name': 'Cards',
        'type': 'REPEAT_GRID',
        'absoluteBoundingBox': box(0, 0, width, height),
        'cellSize': {'width': cell[0], 'height': cell[1]},
        'paddingX': padding[0],
        'paddingY': padding[1],
        'children': rows,
    }
    node.update(extra)
    return node


def grid_rows(labels, image_refs=None, text_data=None, image_data=None):
    """One Card group per label: a text and an image-filled rectangle."""
    rows = []
    for i, label in enumerate(labels):
        image_ref = image_refs[i] if image_refs else 'abcdef123456'
        rows.append(group(f'2:{10 + i}', [
            text(f'2:{20 + i}', label, 0, i * 34, 48, 12, pluginData=text_data or {}),
            image_rect(f'2:{30 + i}', image_ref, 0, i * 34 + 12, 48, 12, pluginData=image_data or {}),
        ], 0, i * 34, 48, 24, name='Card'))
    return rows


@pytest.fixture
def ctx():
    """A fresh clipboard context."""
    return Context(ContextTarget.CLIPBOARD)


@pytest.fixture
def files_ctx():
    """A fresh files context."""
    return Context(ContextTarget.FILES)


@pytest.fixture
def home_doc():
    """One artboard holding a parameterized text and a tappable button."""
    title = text('1:2', 'Hello', 20, 40, 200, 24, name='Title', pluginData={'textParamName': 'title'})
    title['style'] = {'fontFamily': 'Roboto', 'fontSize': 20, 'fontWeight': 700, 'textAlignHorizontal': 'CENTER'}
    button = rect('1:3', 20, 100, 120, 40, name='Button', cornerRadius=8,
                  pluginData={'tapCallbackName': 'onPressed'})
    return document(artboard('1:1', 'Home Screen', [title, button]))


@pytest.fixture
def grid_doc():
    """An artboard holding a repeat grid of three cards with different labels."""
    cards = grid('2:2', grid_rows(['Apple', 'Banana', 'Cherry']))
    return document(artboard('2:1', 'Fruit List', [cards], width=400, height=600))


@pytest.fixture
def component_doc():
    """A Badge master component and a Shop artboard holding two instances of it."""
    master = {
        'id': '3:1',
        'name': 'Badge',
        'type': 'COMPONENT',
        'absoluteBoundingBox': box(500, 0, 80, 30),
        'children': [text('3:2', 'New', 500, 0, 80, 30, pluginData={'textParamName': 'label'})],
    }

    def instance(node_id, label, y):
        return {
            'id': node_id,
            'name': 'Badge',
            'type': 'INSTANCE',
            'componentId': '3:1',
            'absoluteBoundingBox': box(10, y, 80, 30),
            'children': [text(f'I{node_id};3:2', label, 10, y, 80, 30, pluginData={'textParamName': 'label'})],
        }

    shop = artboard('3:10', 'Shop', [instance('3:11', 'Sale', 10), instance('3:12', 'New', 50)])
    return document(shop, master)


@pytest.fixture
def node_with_background_blur():
    """Figma node with BACKGROUND_BLUR effect."""
    return rect('4:1', effects=[{'type': 'BACKGROUND_BLUR', 'visible': True, 'radius': 10}])


@pytest.fixture
def node_with_radial_gradient():
    """Figma node with RADIAL gradient fill (300x150 dimensions)."""
    return rect('4:2', 0, 0, 300, 150, fills=[{
        'type': 'GRADIENT_RADIAL', 'visible': True, 'opacity': 1,
        'gradientStops': [
            {'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}, 'position': 0},
            {'color': {'r': 0, 'g': 0, 'b': 1, 'a': 1}, 'position': 1},
        ],
        'gradientHandlePositions': [{'x': 0.5, 'y': 0.5}, {'x': 1.0, 'y': 0.5}, {'x': 0.5, 'y': 1.0}],
    }])
