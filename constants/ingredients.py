"""
Ingredient Constants

Keywords that mark the tail of an ingredient line as a preparation note.
"""

# A comma clause containing one of these is split off into the ingredient notes
# ("2 onions, finely chopped"). Commas that are part of the name stay
# ("boneless, skinless chicken").
NOTE_KEYWORDS = {
    'optional', 'divided', 'or more', 'or less', 'to taste',
    'for serving', 'for garnish', 'at room temp', 'softened',
    'melted', 'chopped', 'diced', 'minced', 'sliced', 'cubed',
    'sifted', 'packed', 'beaten', 'room temperature', 'thawed',
    'drained', 'rinsed', 'peeled', 'seeded', 'cored', 'trimmed',
    'cut into', 'plus more', 'as needed', 'torn', 'shredded'
}
