PROMPT_REVISUALISE_DEFAULT = """
OUTPUT: one photorealistic, full-bleed photograph. SINGLE, UNBROKEN FRAME (no split-screen, no collage, no grid).

INPUT (references only, DO NOT reproduce this layout in the final image):
• Image 1 = the person as a CHILD.
• Image 2 = the SAME person as an ADULT.

SCENE: the adult and their younger self share a warm, natural moment together in one place:
the adult kneels or sits beside the child and embraces them, both relaxed and clearly interacting.

PRIORITY: IDENTITY > interaction > style.

IDENTITY:
• The child must be recognisably the child from Image 1; the adult must be recognisably the adult from Image 2.
• Match face shape, eyes, nose, lips, eyebrows, hairline and hair colour for each.
• Keep each person's age as in the reference; do not age or de-age anyone.
• Keep natural asymmetry, freckles and moles; no beautification or skin smoothing.

STYLE: soft natural daylight, gentle depth of field, unified colour grade so both people look photographed in the same moment.

HARD NEGATIVES:
• No collage, diptych, frame-within-frame or side-by-side layout.
• No face swap or averaging between the two people.
• No text, watermarks or logos.
"""
