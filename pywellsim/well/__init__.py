from .well import WellState, WellStateError, NodeCoordinates, AbstractWell, Well
