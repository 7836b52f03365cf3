#!/usr/bin/env python3
# ShapeGallery.py – interactive preview of every primitive mesh
#
#   ←/→        previous / next shape
#   F          toggle wireframe
#   mouse drag orbit the camera
#   Esc        quit

import argparse
import logging
import math
import time
from typing import Callable, Dict, Tuple

import glfw
from OpenGL import GL

from shape_meshes.Rendering.Backend import GLBackend
from shape_meshes.Rendering.Camera import OrbitCamera
from shape_meshes.Rendering.Shader import Shader
from shape_meshes.Rendering.Texture import Texture2D, checker_image
from shape_meshes.Rendering.Window import Window
from shape_meshes.ShapeMeshes import ShapeMeshes

VERTEX_SRC = """
#version 330 core
layout(location = 0) in vec3 aPosition;
layout(location = 1) in vec3 aNormal;
layout(location = 2) in vec2 aUV;

uniform mat4 u_view;
uniform mat4 u_proj;

out vec3 vNormal;
out vec3 vWorldPos;
out vec2 vUV;

void main() {
    vNormal   = aNormal;
    vWorldPos = aPosition;
    vUV       = aUV;
    gl_Position = u_proj * u_view * vec4(aPosition, 1.0);
}
"""

FRAGMENT_SRC = """
#version 330 core
in vec3 vNormal;
in vec3 vWorldPos;
in vec2 vUV;

uniform sampler2D u_texture;
uniform vec3 u_eye;
uniform int  u_wireframe;

out vec4 FragColor;

void main() {
    if (u_wireframe == 1) {
        FragColor = vec4(0.9, 0.9, 0.2, 1.0);
        return;
    }
    vec3 n = normalize(vNormal);
    vec3 l = normalize(vec3(0.4, 0.8, 0.6));
    vec3 v = normalize(u_eye - vWorldPos);
    vec3 h = normalize(l + v);
    vec3 base = texture(u_texture, vUV).rgb;
    float diffuse  = max(dot(n, l), 0.0);
    float specular = pow(max(dot(n, h), 0.0), 32.0);
    FragColor = vec4(base * (0.2 + 0.8 * diffuse) + vec3(0.25) * specular, 1.0);
}
"""

# ───────────────────────────────────── shape table
# name → (load, draw(meshes, wireframe, seconds))
DrawFn = Callable[[ShapeMeshes, bool, float], None]

SHAPES: Dict[str, Tuple[str, DrawFn]] = {
    "box":              ("load_box_mesh",              lambda m, w, t: m.draw_box_mesh(w)),
    "plane":            ("load_plane_mesh",            lambda m, w, t: m.draw_plane_mesh(w)),
    "prism":            ("load_prism_mesh",            lambda m, w, t: m.draw_prism_mesh(w)),
    "pyramid3":         ("load_pyramid3_mesh",         lambda m, w, t: m.draw_pyramid3_mesh(w)),
    "pyramid4":         ("load_pyramid4_mesh",         lambda m, w, t: m.draw_pyramid4_mesh(w)),
    "fin":              ("load_fin_mesh",              lambda m, w, t: m.draw_fin_mesh(w)),
    "cone":             ("load_cone_mesh",             lambda m, w, t: m.draw_cone_mesh(wireframe=w)),
    "cylinder":         ("load_cylinder_mesh",         lambda m, w, t: m.draw_cylinder_mesh(wireframe=w)),
    "tapered_cylinder": ("load_tapered_cylinder_mesh", lambda m, w, t: m.draw_tapered_cylinder_mesh(wireframe=w)),
    "tube":             ("load_tube_mesh",             lambda m, w, t: m.draw_tube_mesh(wireframe=w)),
    "sphere":           ("load_sphere_mesh",           lambda m, w, t: m.draw_sphere_mesh(w)),
    "hemisphere":       ("load_hemisphere_mesh",       lambda m, w, t: m.draw_hemisphere_mesh(w)),
    "torus":            ("load_torus_mesh",            lambda m, w, t: m.draw_torus_mesh(w)),
    "half_torus":       ("load_torus_mesh",            lambda m, w, t: m.draw_half_torus_mesh(w)),
    "extra_torus1":     ("load_extra_torus_mesh1",     lambda m, w, t: m.draw_extra_torus_mesh1(w)),
    "extra_torus2":     ("load_extra_torus_mesh2",     lambda m, w, t: m.draw_extra_torus_mesh2(w)),
    "spring":           ("load_spring_mesh",           lambda m, w, t: m.draw_spring_mesh(w)),
    # regenerated every frame from animated parameters
    "partial_cone":     ("load_partial_cone_mesh",
                         lambda m, w, t: m.draw_partial_cone_mesh(w, arc_degrees=180.0 + 170.0 * math.sin(t))),
    "curved_cone":      ("load_curved_cone_mesh",
                         lambda m, w, t: m.draw_curved_cone_mesh(w, bend_radius=2.0 + math.sin(t))),
    "tapered_torus":    ("load_tapered_torus_mesh",
                         lambda m, w, t: m.draw_tapered_torus_mesh(w, sweep_degrees=180.0 + 180.0 * abs(math.sin(t)))),
    "spiral":           ("load_spiral_mesh",
                         lambda m, w, t: m.draw_spiral_mesh(w, flatten_factor=0.5 + 0.45 * math.sin(t))),
    "sine_cone":        ("load_sine_cone_mesh",
                         lambda m, w, t: m.draw_sine_cone_mesh(w, sine_phase=t)),
    "superellipsoid":   ("load_superellipsoid_mesh",
                         lambda m, w, t: m.draw_superellipsoid_mesh(w, vertical_exponent=1.0 + 0.9 * math.sin(t),
                                                                    horizontal_exponent=1.0 + 0.9 * math.cos(t))),
}


def parse_size(text: str) -> Tuple[int, int]:
    try:
        w, h = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got '{text}'") from None
    return w, h


def main() -> None:
    parser = argparse.ArgumentParser("Primitive mesh gallery (OpenGL preview)")
    parser.add_argument("--shape", choices=sorted(SHAPES), default="sphere")
    parser.add_argument("--wireframe", action="store_true")
    parser.add_argument("--size", type=parse_size, default=(800, 800), metavar="WxH")
    parser.add_argument("--texture", help="image applied to every shape (default: checkerboard)")
    parser.add_argument("--screenshot", metavar="PNG",
                        help="save the last rendered frame here before exiting")
    parser.add_argument("--frames", type=int, default=0,
                        help="exit after N frames (0 = run until the window closes)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )

    names = list(SHAPES)
    current = names.index(args.shape)
    wireframe = args.wireframe

    width, height = args.size
    with Window(width, height, f"Shape gallery – {names[current]}") as window:
        GL.glEnable(GL.GL_DEPTH_TEST)
        GL.glEnable(GL.GL_CULL_FACE)

        shader = Shader(VERTEX_SRC, FRAGMENT_SRC)
        texture = Texture2D(args.texture) if args.texture else Texture2D.from_array(checker_image())
        meshes = ShapeMeshes(GLBackend())
        for loader in sorted({load for load, _ in SHAPES.values()}):
            getattr(meshes, loader)()
        logging.info("Loaded %d meshes", len(meshes.registry))

        camera = OrbitCamera(distance=6.0)

        def on_key(win, key, scancode, action, mods):
            nonlocal current, wireframe
            if action != glfw.PRESS:
                return
            if key == glfw.KEY_ESCAPE:
                window.close()
            elif key == glfw.KEY_F:
                wireframe = not wireframe
            elif key in (glfw.KEY_LEFT, glfw.KEY_RIGHT):
                current = (current + (1 if key == glfw.KEY_RIGHT else -1)) % len(names)
                window.set_title(f"Shape gallery – {names[current]}")
                logging.info("shape: %s", names[current])
        window.set_key_callback(on_key)

        start = time.time()

        def render_frame():
            camera.aspect = window.aspect
            window.clear(0.08, 0.08, 0.1)
            shader.use()
            shader.set_uniform_matrix("u_view", camera.view_matrix())
            shader.set_uniform_matrix("u_proj", camera.projection_matrix())
            shader.set_vec3("u_eye", *camera.eye())
            shader.set_int("u_texture", 0)
            shader.set_int("u_wireframe", int(wireframe))
            texture.bind(0)

            _, draw = SHAPES[names[current]]
            draw(meshes, wireframe, time.time() - start)

        mouse_prev = None
        frame = 0
        while not window.should_close():
            if window.is_mouse_button_pressed(glfw.MOUSE_BUTTON_LEFT):
                mx, my = window.get_mouse_pos()
                if mouse_prev is not None:
                    camera.orbit(-(mx - mouse_prev[0]) * 0.3, (my - mouse_prev[1]) * 0.3)
                mouse_prev = (mx, my)
            else:
                mouse_prev = None

            render_frame()

            frame += 1
            if args.frames and frame >= args.frames:
                window.close()

            window.swap_buffers()
            window.poll_events()

        # back buffer contents are undefined after a swap; redraw before capturing
        if args.screenshot:
            render_frame()
            window.save_screenshot(args.screenshot)

        meshes.release_all()
        shader.delete()


if __name__ == "__main__":
    main()
