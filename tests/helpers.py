import collections


def keys(*pressed):
    """Stand-in for pygame.key.get_pressed()"""
    return collections.defaultdict(bool, {k: True for k in pressed})


class FakeInputs:
    def __init__(self, *just_pressed):
        self.just = set(just_pressed)

    def is_just_pressed(self, action):
        return action in self.just

    def is_pressed(self, action):
        return action in self.just
