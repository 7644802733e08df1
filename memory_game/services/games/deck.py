# Gen 1 Pokemon ids: Bulbasaur, Charmander, Squirtle, Pikachu, Jigglypuff, Meowth, Psyduck, Eevee
DEFAULT_CATALOGUE = (1, 4, 7, 25, 39, 52, 54, 133)

ARTWORK_URL = 'https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/{}.png'


def face_for(symbol_id) -> str:
    return ARTWORK_URL.format(symbol_id)
