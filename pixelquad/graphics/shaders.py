# pixelquad/graphics/shaders.py
from typing import Final

POSITION_ATTRIBUTE: Final = "vertex_pos"
TEXTURE_UNIFORM: Final = "cols"

# Clip-space position passed straight through and reused as the lookup
# coordinate for the fragment stage.
VERTEX_SHADER: Final = """
#version 330 core

in vec2 vertex_pos;
out vec2 screen_pos;

void main() {
    gl_Position = vec4(vertex_pos, 0.0, 1.0);
    screen_pos = vertex_pos;
}
"""

# Maps clip space [-1, 1] to texture space [0, 1].
FRAGMENT_SHADER: Final = """
#version 330 core

uniform sampler2D cols;
in vec2 screen_pos;
out vec4 frag_color;

void main() {
    frag_color = texture(cols, (screen_pos + 1.0) / 2.0);
}
"""
