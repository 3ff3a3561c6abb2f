from __future__ import annotations
import html
import re
from typing import Optional

xml_pattern = re.compile(r'(\<[^>]*?\>)', flags=re.DOTALL | re.MULTILINE)
comment_pattern = re.compile(r'\<!--.*?--\>', flags=re.DOTALL | re.MULTILINE)
cdata_pattern = re.compile(r'\<!\[CDATA\[(.*?)\]\]\>', flags=re.DOTALL | re.MULTILINE)
first_word_pattern = re.compile(r'^\s*[/!?]*\s*([\w:.\-]+)')

DOCUMENT_TAG = '#document'
TEXT_TAG = '#text'

def is_self_terminating(svg_value: str) -> bool:
    return svg_value.rstrip().endswith('/>')

def is_terminator(svg_value: str) -> bool:
    return svg_value.strip().startswith('</')

def is_declaration(svg_value: str) -> bool:
    # <?xml ...?>, <!DOCTYPE ...> and friends never have children
    content = svg_value.lstrip()
    return content.startswith('<?') or content.startswith('<!')

def is_tag(svg_value: str) -> bool:
    return svg_value.startswith('<') and svg_value.endswith('>')

def get_tag(svg_value: str) -> str:
    content = svg_value.strip()
    if content.startswith('</'):
        content = content[2:]
    elif content.startswith('<'):
        content = content[1:]
    if content.endswith('>'):
        content = content[:-1]
    if content.endswith('/'):
        content = content[:-1]

    match = first_word_pattern.search(content)
    if match:
        return match.group(1)
    return ""

def parse_attributes(element: str) -> dict:
    attributes = {}

    content = element.strip()
    if content.startswith('</'):
        return attributes
    if content.startswith('<'):
        content = content[1:]
    if content.endswith('>'):
        content = content[:-1]
    if content.endswith('/'):
        content = content[:-1].rstrip()

    parts = content.split(None, 1)
    if len(parts) < 2:
        return attributes

    attr_string = parts[1]

    state = 0
    accumulator = ""
    current_key = ""
    quote = ""
    word_ended = False

    for char in attr_string:
        if state == 0:
            if char == '=':
                current_key = accumulator.strip()
                accumulator = ""
                word_ended = False
                state = 1
            elif char.isspace():
                word_ended = bool(accumulator)
            else:
                if word_ended:
                    # a bare word without a value is dropped
                    accumulator = ""
                    word_ended = False
                accumulator += char
        elif state == 1:
            if char == '"' or char == "'":
                quote = char
                state = 2
        elif state == 2:
            if char == quote:
                attributes[current_key] = html.unescape(accumulator)
                accumulator = ""
                current_key = ""
                state = 0
            else:
                accumulator += char

    if current_key and current_key not in attributes and accumulator:
        attributes[current_key] = html.unescape(accumulator)

    return attributes

def tokenize(data: str) -> list[str]:
    """Split markup into tag entries and the text runs between them."""
    data = comment_pattern.sub('', data)
    data = cdata_pattern.sub(lambda m: html.escape(m.group(1), quote=False), data)
    return [entry for entry in xml_pattern.split(data) if entry]

class Node:
    def __init__(self, element: str = '', tag: str = None, text: str = None):
        self.element = element
        self.tag = tag if tag is not None else get_tag(element)
        self.attributes = parse_attributes(element) if element else {}
        self.text = text
        self.declaration = bool(element) and is_declaration(element)
        self.children: list[Node] = []
        self.parent: Optional[Node] = None

    @classmethod
    def text_node(cls, text: str) -> 'Node':
        return cls(tag=TEXT_TAG, text=html.unescape(text))

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_TAG

    @property
    def is_element(self) -> bool:
        return self.tag not in (TEXT_TAG, DOCUMENT_TAG) and not self.declaration

    def add_child(self, element: str):
        new_node = Node(element)
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def add_node_child(self, new_node: 'Node'):
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def compare_tag(self, element: str) -> bool:
        return self.tag == get_tag(element)

    def get(self, attr_name: str, default: str = None) -> Optional[str]:
        return self.attributes.get(attr_name, default)

    def next_siblings(self) -> list['Node']:
        """This node followed by every later sibling, in document order."""
        if self.parent is None:
            return [self]
        index = self.parent.children.index(self)
        return self.parent.children[index:]

    @property
    def text_content(self) -> str:
        if self.is_text:
            return self.text or ''
        return ''.join(child.text_content for child in self.children)

def parse_markup(data: str) -> Node:
    """Build a document node whose children are the top-level entries of ``data``.

    Mismatched closing tags are skipped rather than reported.
    """
    document = Node(tag=DOCUMENT_TAG)
    r = document

    for svg_element in tokenize(data):
        if not is_tag(svg_element):
            # text before the first element is not content
            if r is not document:
                r.add_node_child(Node.text_node(svg_element))
            continue

        if is_terminator(svg_element):
            node = r
            while node is not document and not node.compare_tag(svg_element):
                node = node.parent
            if node is not document:
                r = node.parent
            continue

        if is_self_terminating(svg_element) or is_declaration(svg_element):
            r.add_child(svg_element)
        else:
            new_child = Node(svg_element)
            r.add_node_child(new_child)
            r = new_child

    return document

def parse_svg_file(path: str) -> Node:
    with open(path, 'r', encoding='utf-8') as file:
        data = file.read()

    return parse_markup(data)
