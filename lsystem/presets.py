# lsystem/presets.py
"""Named example grammars. Each preset is a dict of axiom, rules and instructions text."""

PLANT_INSTRUCTIONS = """F = forward 10
+ = turn 25
- = turn -25
< = scale 0.8"""

PRESETS = {
    "plant": {
        "axiom": "A",
        "rules": "A -> F[-A]F[-A]+FA\nF -> FF",
        "instructions": PLANT_INSTRUCTIONS,
    },
    "bush": {
        "axiom": "F",
        "rules": "F -> FF-[-F+F+F]+[+F-F-F]",
        "instructions": "F = forward 10\n+ = turn 22.5\n- = turn -22.5",
    },
    "fern": {
        "axiom": "X",
        "rules": "X -> F+[[X]-X]-F[-FX]+X\nF -> FF",
        "instructions": "F = forward 10\n+ = turn 25\n- = turn -25",
    },
    "weed": {
        "axiom": "F",
        "rules": "F -> F[+F]F[-F][F]",
        "instructions": "F = forward 10\n+ = turn 20\n- = turn -20",
    },
    "tapered": {
        "axiom": "A",
        "rules": "A -> F[<+A][<-A]<FA",
        "instructions": "F = forward 10\n+ = turn 30\n- = turn -30\n< = scale 0.7",
    },
}

DEFAULT_PRESET = "plant"
