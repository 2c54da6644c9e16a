from __future__ import annotations
import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

# Small fixed lexicon used by both the validator and the AI.
# Swap in a larger word list by passing `words` to DictionaryService.

DEFAULT_WORDS = frozenset({
    # 2 letters
    'AA','AB','AD','AE','AG','AH','AI','AL','AM','AN','AR','AS',
    'AT','AW','AX','AY','BA','BE','BI','BO','BY','DA','DE','DO',
    'ED','EF','EH','EL','EM','EN','ER','ES','ET','EW','EX','FA',
    'FE','GI','GO','HA','HE','HI','HM','HO','ID','IF','IN','IS',
    'IT','JO','KA','KI','LA','LI','LO','MA','ME','MI','MM','MO',
    'MU','MY','NA','NE','NO','NU','OD','OE','OF','OH','OI','OK',
    'OM','ON','OP','OR','OS','OW','OX','OY','PA','PE','PI','PO',
    'QI','RE','SH','SI','SO','TA','TI','TO','UH','UM','UN','UP',
    'US','UT','WE','WO','XI','XU','YA','YE','ZA',
    # 3 letters
    'ACE','AGE','AID','AIM','AIR','ALE','ALL','AND','ANT','APE','ARC','ARE',
    'ARK','ARM','ART','ASK','ATE','AWE','AXE','BAD','BAG','BAN','BAR','BAT',
    'BED','BET','BIG','BIT','BOW','BOX','BOY','BUD','BUG','BUS','BUT','BUY',
    'CAB','CAN','CAP','CAR','CAT','COP','COT','COW','CRY','CUB','CUP','CUT',
    'DAD','DAM','DAY','DEN','DEW','DID','DIG','DIM','DIP','DOC','DOG','DOT',
    'DRY','DUB','DUG','DUN','DUO','EAR','EAT','EEL','EGG','ELF','ELK','ELM',
    'EMU','END','ERA','EVE','EWE','EYE','FAN','FAR','FAT','FAX','FED','FEW',
    'FIG','FIN','FIT','FIX','FLY','FOB','FOE','FOG','FOP','FOR','FOX','FRY',
    'FUN','FUR','GAB','GAG','GAP','GAS','GEL','GEM','GET','GNU','GOB','GOD',
    'GOT','GUM','GUN','GUT','GUY','GYM','HAD','HAS','HAT','HER','HIM','HIS',
    'HIT','HOT','HOW','JAR','KEY','LAP','LET','MAN','MAP','MAY','MOM','NET',
    'NEW','NOT','NOW','OLD','ONE','OUR','OUT','OWL','PEN','PUT','RAG','RAN',
    'RED','RUN','SAT','SAY','SEE','SET','SHE','SIT','TAP','TEN','THE','TOO',
    'TOP','TRY','USE','VAN','WAR','WAS','WAY','WHO','YAM','YOU','ZAP',
    # 4 letters
    'ABLE','ALSO','APEX','AREA','ARMY','AWAY','BACK','BALL','BAND','BANK','BASE','BATH',
    'BEAN','BEAR','BEAT','BEEN','BEER','BELL','BELT','BEND','BEST','BILL','BIRD','BITE',
    'BLOW','BLUE','BOAT','BODY','BOLD','BOMB','BOND','BONE','BOOK','BOOT','BORE','BORN',
    'BOSS','BOTH','BOWL','BULK','BURN','BUSY','BUZZ','CAKE','CALL','CALM','CAME','CAMP',
    'CARD','CARE','CART','CASE','CASH','CAST','CAVE','CHIP','CITY','CLAD','CLAY','CLIP',
    'CLUB','CLUE','COAL','COAT','CODE','COIN','COLD','COLE','COME','COOK','COOL','COPE',
    'COPY','CORD','CORE','CORN','COST','CREW','CROP','CROW','CURE','CURL','CUTE','DALE',
    'DAME','DAMN','DARE','DARK','DASH','DATA','DATE','DAWN','DEAD','DEAF','DEAL','DEAN',
    'DEAR','DEBT','DECK','DEED','DEEM','DEEP','DEER','DENY','DESK','DIAL','DICE','DIET',
    'DIRE','DIRT','DISH','DISK','DOCK','DOES','DONE','DOOM','DOOR','DOSE','DOWN','DRAG',
    'DRAW','DREW','DROP','DRUM','DUAL','DUEL','DUKE','DULL','DUMB','DUMP','DUNE','DUST',
    'DUTY','EACH','EARL','EARN','EASE','EAST','EASY','EDGE','EDIT','ELSE','EVEN','EVER',
    'EVIL','EXAM','EXEC','EXIT','FACE','FACT','FADE','FAIL','FAIR','FAKE','FALL','FAME',
    'FANG','FARE','FARM','FAST','FATE','FEAR','FEAT','FEED','FEEL','FEET','FELL','FELT',
    'FILE','FILL','FILM','FIND','FINE','FIRE','FIRM','FISH','FIST','FIZZ','FLAG','FLAT',
    'FLED','FLEW','FLIP','FLOW','FOAM','FOLD','FOLK','FOND','FONT','FOOD','FOOL','FOOT',
    'FORD','FORE','FORK','FORM','FORT','FOUL','FOUR','FREE','FROM','FUEL','FULL','FUND',
    'FURY','FUSE','FUZZ','GAIN','GALE','GAME','GANG','GAPE','GATE','GAVE','GAZE','GEAR',
    'GENE','GIFT','GIRL','GIVE','GLAD','GLEN','GLOW','GLUE','GOAT','GOES','GOLD','GOLF',
    'GONE','GOOD','GRAB','GRAY','GREW','GRID','GRIM','GRIN','GRIP','GROW','GULF','GURU',
    'GUST','JAZZ','JINX','JIVE','JOKE','JUMP','JURY','JUST','KNEE','KNEW','KNIT','KNOB',
    'KNOT','KNOW','NEXT','OXEN','QOPH','QUAD','QUAG','QUIZ','RAZZ','TAXI','TEXT','TIZZ',
    'WADE','WAGE','WAIT','WAKE','WALK','WALL','WANT','WARD','WARM','WARN','WARP','WASH',
    'WAVE','WEAK','WEAR','WEED','WEEK','WELL','WENT','WERE','WEST','WHAT','WHEN','WHOM',
    'WIDE','WIFE','WILD','WILL','WIND','WINE','WING','WIRE','WISE','WISH','WITH','WOKE',
    'WOLF','WOMB','WOOD','WOOL','WORD','WORE','WORK','WORM','WORN','WRAP','WREN','WRIT',
    'ZEAL','ZERO','ZINC','ZONE','ZOOM',
    # 5 letters
    'ABOUT','ABOVE','AFTER','AGAIN','BEING','BELOW','BLACK','BOARD','BRAIN','BREAD','BREAK','BRING',
    'BROAD','BROWN','BUILD','CARRY','CATCH','CAUSE','CHAIN','CHAIR','CHEAP','CHECK','CHIEF','CHILD',
    'CHINA','CLAIM','CLASS','CLEAN','CLEAR','CLIMB','CLOCK','CLOSE','CLOUD','COACH','COAST','COLOR',
    'COMES','COULD','COUNT','COURT','COVER','CRAFT','CRASH','CRAZY','CREAM','CRIME','CROSS','CROWD',
    'CROWN','CURVE','CYCLE','DANCE','DEATH','DEPTH','DOUBT','DRAFT','DRAIN','DRAMA','DRAWN','DREAM',
    'DRESS','DRIED','DRINK','DRIVE','DROVE','DYING','EAGER','EARLY','EARTH','EIGHT','ELECT','ELITE',
    'EMPTY','ENEMY','ENJOY','ENTER','ENTRY','EQUAL','ERROR','EVENT','EVERY','EXACT','EXTRA','FAITH',
    'FALSE','FAULT','FEAST','FENCE','FEWER','FIBER','FIELD','FIFTH','FIFTY','FIGHT','FINAL','FINDS',
    'FIRST','FIXED','FLAME','FLASH','FLEET','FLESH','FLIES','FLOAT','FLOOD','FLOOR','FLOUR','FLUID',
    'FLUSH','FOCUS','FORCE','FORTH','FOUND','FRAME','FRANK','FRAUD','FRESH','FRONT','FROST','FRUIT',
    'FULLY','FUNNY','WORLD','WOULD','WRITE','WRONG',
})

class DictionaryService:
    def __init__(self, words: Optional[Iterable[str]] = None):
        # Store uppercase words
        source = DEFAULT_WORDS if words is None else words
        self._words: FrozenSet[str] = frozenset(w.strip().upper() for w in source if w.strip())
        self._by_length: Dict[int, List[str]] = {}
        for w in sorted(self._words):
            self._by_length.setdefault(len(w), []).append(w)
        logger.debug("Loaded %d words", len(self._words))

    def is_valid(self, word: str) -> bool:
        if not word:
            return False
        return word.upper() in self._words

    def words_of_length(self, length: int) -> List[str]:
        return self._by_length.get(length, [])

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)

# Default instance for the HTTP layer
service = DictionaryService()
