import io
import json
import logging
import pathlib
import xml.etree.ElementTree as ET
from mssilp.pathway import Pathway
from mssilp.errors import MalformedInputError


logger = logging.getLogger(__name__)

# Extensions of the supported input formats
INPUT_TYPES = {
    '.read': 'readable',
    '.txt': 'readable',
    '.pddl': 'pddl',
    '.json': 'json'
}


def _read_text(file_or_path):
    if isinstance(file_or_path, io.IOBase):
        return file_or_path.read()
    with open(file_or_path, 'r') as f:
        return f.read()


def _read_count(lines, section):
    line = next(lines, None)
    if line is None:
        raise MalformedInputError(f"Unexpected end of file, missing {section}")
    try:
        return int(line.strip())
    except ValueError:
        raise MalformedInputError(f"Invalid {section}: {line!r}")


def _read_names(lines, count, section):
    names = []
    for _ in range(count):
        line = next(lines, None)
        if line is None:
            raise MalformedInputError(f"Unexpected end of file reading {section} "
                                      f"({len(names)} of {count} entries)")
        names.append(line.strip())
    return names


def parse_readable(text):
    """Parse a pathway in the readable format.

    The format is line based: the number of compounds, one compound name per
    line, the number of reactions and then, for each reaction, its name, the
    number of substrates, the substrate names, the number of products and
    the product names.

    Args:
        text (str): Content of the file.

    Returns:
        Pathway: The parsed pathway.
    """
    lines = iter([line for line in text.splitlines() if line.strip() != ""])
    pathway = Pathway()
    num_compounds = _read_count(lines, "compound count")
    logger.info("File contains %d compounds", num_compounds)
    for name in _read_names(lines, num_compounds, "compounds"):
        pathway.add_compound(name)
    num_reactions = _read_count(lines, "reaction count")
    logger.info("File contains %d reactions", num_reactions)
    for r in range(num_reactions):
        name = next(lines, None)
        if name is None:
            raise MalformedInputError(f"Unexpected end of file, read {r} of {num_reactions} reactions")
        name = name.strip()
        substrate = _read_names(lines, _read_count(lines, f"substrate count of {name}"),
                                f"substrate of {name}")
        product = _read_names(lines, _read_count(lines, f"product count of {name}"),
                              f"product of {name}")
        pathway.add_reaction(name,
                             [pathway.get_compound_id(c) for c in substrate],
                             [pathway.get_compound_id(c) for c in product])
    return pathway


def parse_pddl(text):
    """Parse a pathway from a PDDL domain.

    Each `(:action reaction_<name>` opens a reaction. Compound atoms (lines
    starting with `(C`) after `:precondition` are substrates and after
    `:effect` are products. Compounds get their ids in order of appearance.

    Args:
        text (str): Content of the file.

    Returns:
        Pathway: The parsed pathway.
    """
    pathway = Pathway()
    reactions = []
    reading_substrate = True
    for raw in text.splitlines():
        line = "".join(raw.split())
        if line.startswith("(:actionreaction_"):
            reactions.append((line[len("(:actionreaction_"):], [], []))
            reading_substrate = True
        elif line.startswith(":precondition"):
            reading_substrate = True
        elif line.startswith(":effect"):
            reading_substrate = False
        elif line.startswith("(C") and len(reactions) > 0:
            name = line.strip("()")
            cid = pathway.find_compound(name)
            if cid is None:
                cid = pathway.add_compound(name)
            _, substrate, product = reactions[-1]
            (substrate if reading_substrate else product).append(cid)
    if len(reactions) == 0:
        raise MalformedInputError("No reaction found in the PDDL file")
    for name, substrate, product in reactions:
        pathway.add_reaction(name, substrate, product)
    logger.info("File contains %d compounds and %d reactions",
                pathway.num_compounds, pathway.num_reactions)
    return pathway


def load_pathway(file_or_path, input_type=None):
    """Load a pathway from a file.

    Args:
        file_or_path (str): Path to the file, or an open text file.
        input_type (str, optional): 'readable', 'pddl' or 'json'. By default
            it is guessed from the extension of the file (.read, .txt, .pddl
            or .json).

    Returns:
        Pathway: The loaded pathway.
    """
    if input_type is None:
        ext = pathlib.Path(str(getattr(file_or_path, 'name', file_or_path))).suffix
        if ext not in INPUT_TYPES:
            raise ValueError(f"Cannot guess the format of {file_or_path}, "
                             f"provide the input type")
        input_type = INPUT_TYPES[ext]
    text = _read_text(file_or_path)
    if input_type == 'readable':
        return parse_readable(text)
    elif input_type == 'pddl':
        return parse_pddl(text)
    elif input_type == 'json':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON pathway: {e}") from e
        return Pathway.from_dict(data)
    else:
        raise ValueError(f"Unsupported input type {input_type}")


def export_pathway(pathway, path_to_exported_file):
    """Export a pathway to a JSON file.

    Compounds and reactions are written verbatim, so the file can be loaded
    again with [load_pathway][mssilp.pwio.load_pathway].

    Args:
        pathway (Pathway): an instance of a Pathway
        path_to_exported_file (str): Path to the exported file (e.g. /path/to/file.json)
    """
    with open(path_to_exported_file, 'w') as f_out:
        json.dump(pathway.to_dict(), f_out, indent=2)


def read_solution(path):
    """Read the variables of a CPLEX XML solution file.

    Args:
        path (str): Path to the solution file.

    Returns:
        dict: variable names mapped to their (float) values.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise MalformedInputError(f"Invalid solution file {path}: {e}") from e
    variables = root.find("variables")
    if variables is None:
        raise MalformedInputError(f"The solution file {path} has no variables section")
    values = dict()
    for var in variables.iter("variable"):
        try:
            values[var.attrib["name"]] = float(var.attrib["value"])
        except (KeyError, ValueError) as e:
            raise MalformedInputError(f"Invalid variable in {path}: {var.attrib}") from e
    return values
