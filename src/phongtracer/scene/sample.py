"""Built-in sample scene.

A small scene in the style of the course inputs: a unit box sitting behind
the image window and a sphere in front of it, both visible from the default
eye and lit by the default white light. Useful for demos and smoke tests
without network access.

Example:
    >>> from phongtracer.scene.sample import create_sample_scene
    >>> scene = create_sample_scene()
    >>> len(scene.primitives)
    2
"""

from phongtracer.scene.loader import DEFAULT_EYE, DEFAULT_LIGHT
from phongtracer.scene.model import Box, ImageWindow, Point, Scene, Sphere

# Materials
BOX_AMBIENT = (0.1, 0.1, 0.1)
BOX_DIFFUSE = (0.2, 0.4, 0.8)
BOX_SPECULAR = (0.3, 0.3, 0.3)
BOX_SHININESS = 5.0

SPHERE_AMBIENT = (0.1, 0.1, 0.1)
SPHERE_DIFFUSE = (0.8, 0.2, 0.2)
SPHERE_SPECULAR = (0.5, 0.5, 0.5)
SPHERE_SHININESS = 11.0


def create_sample_scene(
    window: ImageWindow | None = None,
    eye: Point = DEFAULT_EYE,
) -> Scene:
    """Create the sample scene.

    Args:
        window: Image window orientation. None means ImageWindow().
        eye: The eye position.

    Returns:
        A scene with a box spanning [0.1, 0.9] x [0.1, 0.5] x [0.5, 1.5] and
        a sphere of radius 0.2 at (0.5, 0.65, 0.6).
    """
    box = Box(
        lx=0.1,
        rx=0.9,
        by=0.1,
        ty=0.5,
        fz=0.5,
        rz=1.5,
        ambient=BOX_AMBIENT,
        diffuse=BOX_DIFFUSE,
        specular=BOX_SPECULAR,
        n=BOX_SHININESS,
    )
    sphere = Sphere(
        x=0.5,
        y=0.65,
        z=0.6,
        r=0.2,
        ambient=SPHERE_AMBIENT,
        diffuse=SPHERE_DIFFUSE,
        specular=SPHERE_SPECULAR,
        n=SPHERE_SHININESS,
    )
    return Scene(
        primitives=(box, sphere),
        lights=(DEFAULT_LIGHT,),
        eye=eye,
        window=window if window is not None else ImageWindow(),
    )
