from __future__ import annotations
import re

xml_pattern = re.compile(r'(\<[^>]*?\>)', flags=re.DOTALL | re.MULTILINE)
comment_pattern = re.compile(r'\<!--.*?--\>', flags=re.DOTALL | re.MULTILINE)
first_word_pattern = re.compile(r'^\s*[/!?]*\s*([\w:-]+)')
attribute_pattern = re.compile(r'([\w:.-]+)\s*=\s*(["\'])(.*?)\2', flags=re.DOTALL)


def is_self_terminating(svg_value: str) -> bool:
    return svg_value.rstrip().endswith('/>')


def is_terminator(svg_value: str) -> bool:
    return svg_value.strip().startswith('</')


def is_declaration(svg_value: str) -> bool:
    return svg_value.strip().startswith(('<?', '<!'))


def get_tag(svg_value: str) -> str:
    match = first_word_pattern.match(svg_value.strip().lstrip('<'))
    return match.group(1) if match else ""


def parse_style(style: str) -> dict[str, str]:
    declarations = {}
    for declaration in style.split(';'):
        if ':' not in declaration:
            continue
        name, value = declaration.split(':', 1)
        declarations[name.strip()] = value.strip()
    return declarations


def parse_attributes(element: str) -> dict[str, str]:
    content = element.strip()
    if content.startswith('</'):
        return {}

    tag = get_tag(content)
    body = content[content.find(tag) + len(tag):] if tag else content

    attributes = {m.group(1): m.group(3) for m in attribute_pattern.finditer(body)}

    # Inline style declarations win over presentation attributes.
    if 'style' in attributes:
        attributes.update(parse_style(attributes.pop('style')))

    return attributes


def tokenize_svg(data: str) -> list[str]:
    data = comment_pattern.sub('', data)
    return xml_pattern.findall(data)


def read_svg_file(path: str) -> list[str]:
    with open(path, 'r', encoding='utf-8') as file:
        return tokenize_svg(file.read())


class Node:
    def __init__(self, element: str):
        self.element = element
        self.tag = get_tag(element)
        self.attributes = parse_attributes(element)
        self.children: list[Node] = []
        self.parent: Node | None = None

    def add_child(self, element: str) -> 'Node':
        return self.add_node_child(Node(element))

    def add_node_child(self, new_node: 'Node') -> 'Node':
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def compare_tag(self, element: str) -> bool:
        return self.tag == get_tag(element)

    def get_attribute(self, attr_name: str, default: str = None) -> str:
        return self.attributes.get(attr_name, default)

    def print_tree(self, level=0):
        shown = list(self.attributes.items())[:3]
        summary = ', '.join(f"{k}={v}" for k, v in shown)
        if len(self.attributes) > len(shown):
            summary += "..."
        print(f"{'    ' * level}- {self.tag} ({summary})")
        for child in self.children:
            child.print_tree(level + 1)
