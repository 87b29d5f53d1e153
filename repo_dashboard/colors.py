"""Display colors for programming languages."""

from __future__ import annotations

from types import MappingProxyType

LANGUAGE_COLORS = MappingProxyType(
    {
        "ActionScript": "#882B0F",
        "Ada": "#02f88c",
        "Apex": "#1797c0",
        "Assembly": "#6E4C13",
        "Astro": "#ff5a03",
        "Batchfile": "#C1F12E",
        "C": "#555555",
        "C#": "#178600",
        "C++": "#f34b7d",
        "Clojure": "#db5855",
        "CMake": "#DA3434",
        "CoffeeScript": "#244776",
        "Common Lisp": "#3fb68b",
        "Crystal": "#000100",
        "CSS": "#563d7c",
        "Cuda": "#3A4E3A",
        "D": "#ba595e",
        "Dart": "#00B4AB",
        "Dockerfile": "#384d54",
        "Elixir": "#6e4a7e",
        "Elm": "#60B5CC",
        "Emacs Lisp": "#c065db",
        "Erlang": "#B83998",
        "F#": "#b845fc",
        "Fortran": "#4d41b1",
        "GDScript": "#355570",
        "GLSL": "#5686a5",
        "Go": "#00ADD8",
        "Groovy": "#4298b8",
        "Handlebars": "#f7931e",
        "Haskell": "#5e5086",
        "HCL": "#844FBA",
        "HTML": "#e34c26",
        "Java": "#b07219",
        "JavaScript": "#f1e05a",
        "Jsonnet": "#0064bd",
        "Julia": "#a270ba",
        "Jupyter Notebook": "#DA5B0B",
        "Kotlin": "#A97BFF",
        "Less": "#1d365d",
        "Lua": "#000080",
        "Makefile": "#427819",
        "Markdown": "#083fa1",
        "MATLAB": "#e16737",
        "MDX": "#fcb32c",
        "Nim": "#ffc200",
        "Nix": "#7e7eff",
        "Objective-C": "#438eff",
        "Objective-C++": "#6866fb",
        "OCaml": "#ef7a08",
        "Pascal": "#E3F171",
        "Perl": "#0298c3",
        "PHP": "#4F5D95",
        "PowerShell": "#012456",
        "Processing": "#0096D8",
        "Prolog": "#74283c",
        "PureScript": "#1D222D",
        "Python": "#3572A5",
        "R": "#198CE7",
        "Racket": "#3c5caa",
        "Raku": "#0000fb",
        "Ruby": "#701516",
        "Rust": "#dea584",
        "Scala": "#c22d40",
        "Scheme": "#1e4aec",
        "SCSS": "#c6538c",
        "Shell": "#89e051",
        "Smalltalk": "#596706",
        "Solidity": "#AA6746",
        "Starlark": "#76d275",
        "Svelte": "#ff3e00",
        "Swift": "#F05138",
        "TeX": "#3D6117",
        "TSQL": "#e38c00",
        "Twig": "#c1d026",
        "TypeScript": "#3178c6",
        "V": "#4f87c4",
        "Vala": "#a56de2",
        "Verilog": "#b2b7f8",
        "VHDL": "#adb2cb",
        "Vim Script": "#199f4b",
        "Visual Basic .NET": "#945db7",
        "Vue": "#41b883",
        "WebAssembly": "#04133b",
        "Zig": "#ec915c",
    }
)


def get_language_color(language: str) -> str:
    """Return the hex color used to display ``language``.

    Unknown names get a stable synthetic color derived from a 32-bit string
    hash, so the same name always renders the same way.
    """

    color = LANGUAGE_COLORS.get(language)
    if color is not None:
        return color
    return synthetic_color(language)


def synthetic_color(name: str) -> str:
    value = 0
    encoded = name.encode("utf-16-le", "surrogatepass")
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        value = (code_unit + ((value << 5) - value)) & 0xFFFFFFFF
    return f"#{value & 0xFFFFFF:06x}"


__all__ = ["LANGUAGE_COLORS", "get_language_color", "synthetic_color"]
