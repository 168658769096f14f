"""Camera module for pixel-to-ray mapping.

Components:
    window: Fixed unit image window in the plane z = 0 with an explicit
        vertical orientation flag

Camera responsibilities:
    - Map raster pixel centers to points on the image window
    - Build primary rays from the eye through those points

The window module declares Taichi fields, so it is not imported here.
Import it directly once Taichi is initialized:
    from phongtracer.camera.window import setup_camera, get_ray
"""
