"""
Diagram Export

Structural views of a state machine model, independent of any generated
paths: a Mermaid state diagram and an XML inventory.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Union
from xml.dom import minidom

from ..config.generation import DiagramFormat
from ..core.model import StateMachineModel

logger = logging.getLogger(__name__)


def to_mermaid(model: StateMachineModel) -> str:
    """Render the model as a Mermaid ``stateDiagram-v2``."""
    lines = ['stateDiagram-v2']

    for state in model.get_all_states():
        if state.initial:
            lines.append(f"  [*] --> {state.id}")
        if state.final:
            lines.append(f"  {state.id} --> [*]")

    for transition in model.get_all_transitions():
        lines.append(f"  {transition.from_state} --> {transition.to_state}: {transition.name}")

    return '\n'.join(lines)


def to_xml(model: StateMachineModel) -> str:
    """Render the model's states and transitions as pretty-printed XML."""
    root = ET.Element("StateMachine")
    root.set("name", model.name)
    if model.version:
        root.set("version", model.version)
    root.set("timestamp", datetime.now().isoformat())

    states = model.get_all_states()
    transitions = model.get_all_transitions()

    states_elem = ET.SubElement(root, "States")
    states_elem.set("count", str(len(states)))
    for state in states:
        state_elem = ET.SubElement(states_elem, "State")
        state_elem.set("id", state.id)
        state_elem.set("name", state.name)
        if state.initial:
            state_elem.set("initial", "true")
        if state.final:
            state_elem.set("final", "true")
        state_elem.set("outgoing", str(len(model.get_transitions_from(state.id))))

        if state.invariants:
            invariants_elem = ET.SubElement(state_elem, "Invariants")
            for invariant in state.invariants:
                inv_elem = ET.SubElement(invariants_elem, "Invariant")
                inv_elem.set("type", invariant.type.value)
                if invariant.selector:
                    inv_elem.set("selector", invariant.selector)
                if invariant.value:
                    inv_elem.set("value", invariant.value)
                if invariant.condition:
                    inv_elem.text = invariant.condition

    transitions_elem = ET.SubElement(root, "Transitions")
    transitions_elem.set("count", str(len(transitions)))
    for transition in transitions:
        trans_elem = ET.SubElement(transitions_elem, "Transition")
        trans_elem.set("id", transition.id)
        trans_elem.set("name", transition.name)
        trans_elem.set("actions", str(len(transition.actions)))
        if transition.priority is not None:
            trans_elem.set("priority", str(transition.priority))

        ET.SubElement(trans_elem, "FromState").text = transition.from_state
        ET.SubElement(trans_elem, "ToState").text = transition.to_state
        if transition.trigger:
            ET.SubElement(trans_elem, "Trigger").text = transition.trigger
        if transition.guard:
            ET.SubElement(trans_elem, "Guard").text = transition.guard

    rough_string = ET.tostring(root, encoding='unicode')
    pretty_xml = minidom.parseString(rough_string).toprettyxml(indent="  ")

    # Remove empty lines
    return '\n'.join(line for line in pretty_xml.split('\n') if line.strip())


def render_diagram(model: StateMachineModel, fmt: DiagramFormat = DiagramFormat.MERMAID) -> str:
    if DiagramFormat(fmt) == DiagramFormat.XML:
        return to_xml(model)
    return to_mermaid(model)


def save_diagram(model: StateMachineModel, output_file: Union[str, Path],
                 fmt: DiagramFormat = DiagramFormat.MERMAID) -> Path:
    """Render the model diagram and write it to ``output_file``."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(render_diagram(model, fmt))
    logger.info(f"Diagram saved: {output_file}")
    return output_file
