# whitted/errors.py


class SceneError(ValueError):
    """
    A scene that cannot be rendered: unresolved mesh or texture ids, an
    unusable camera, or a malformed scene/mesh file. Raised before any
    pixel is computed.
    """
