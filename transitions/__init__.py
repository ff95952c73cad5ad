from transitions.transition import Transition, DEFAULT_TRANSITION_DURATION
