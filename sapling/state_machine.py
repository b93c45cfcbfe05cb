from dataclasses import dataclass
from enum import Enum


class ElementState(Enum):
    OPEN_ANGLE = 1
    TAG_NAME = 2
    ATTR_LIST = 3
    CLOSE_ANGLE = 4

    CHILDREN = 5

    CLOSE_SLASH_ANGLE = 6
    END_TAG_NAME = 7
    END_ANGLE = 8

    DONE = 9


TRANSITIONS: dict[ElementState, ElementState] = {
    ElementState.OPEN_ANGLE: ElementState.TAG_NAME,
    ElementState.TAG_NAME: ElementState.ATTR_LIST,
    ElementState.ATTR_LIST: ElementState.CLOSE_ANGLE,
    ElementState.CLOSE_ANGLE: ElementState.CHILDREN,
    ElementState.CHILDREN: ElementState.CLOSE_SLASH_ANGLE,
    ElementState.CLOSE_SLASH_ANGLE: ElementState.END_TAG_NAME,
    ElementState.END_TAG_NAME: ElementState.END_ANGLE,
    ElementState.END_ANGLE: ElementState.DONE,
}


@dataclass
class ElementStateMachine:
    """
    Tracks which part of one element the parser is working on.

    The parser calls ``advance`` before each step; the state a failure
    is raised in tells you which piece of the element was malformed.
    """
    state: ElementState = ElementState.OPEN_ANGLE

    @property
    def done(self) -> bool:
        return self.state == ElementState.DONE

    def next_state(self) -> ElementState:
        if self.done:
            raise RuntimeError("Element is already closed")
        return TRANSITIONS[self.state]

    def advance(self, to_state: ElementState) -> None:
        expected = self.next_state()
        if to_state != expected:
            raise RuntimeError(
                f"Illegal element transition {self.state.name} -> "
                f"{to_state.name} (expected {expected.name})"
            )
        self.state = to_state

    def process(self, *states: ElementState) -> None:
        """
        This method is used for only testing purposes.
        """
        for state in states:
            self.advance(state)
