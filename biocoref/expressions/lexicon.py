"""Closed word lists used to recognize coreferential mentions."""

PERSONAL_PRONOUNS = ("i", "you", "she", "he", "it", "we", "they", "me", "him", "her", "us", "them")
POSSESSIVE_PRONOUNS = ("my", "your", "her", "his", "its", "our", "their", "mine", "yours", "hers",
                       "ours", "theirs")
DEMONSTRATIVE_PRONOUNS = ("this", "that", "these", "those")
DISTRIBUTIVE_PRONOUNS = ("either", "neither", "both", "each")
RECIPROCAL_PRONOUNS = ("each other", "one another", "one to the other")
INDEFINITE_PRONOUNS = ("a", "an", "some", "any", "another", "all")
WH_RELATIVE_PRONOUNS = ("which", "whose", "who", "whom", "where")
REFLEXIVE_PRONOUNS = ("myself", "yourself", "herself", "himself", "itself", "ourselves",
                      "yourselves", "themselves")

DEFINITE_DETERMINERS = ("the",)
INDEFINITE_ADJECTIVES = ("other",)
DEMONSTRATIVE_ADJECTIVES = ("such",)

ALL_DETERMINERS = ("the", "these", "those", "this", "that", "either", "neither", "both", "each",
                   "no", "a", "an", "some", "many", "any", "another", "all")
ALL_ADJECTIVES = ("such", "other")

# relative pronouns that do not refer back to a noun phrase
NON_COREFERENTIAL_RELATIVE_PRONOUNS = ("when", "why", "how", "what")
