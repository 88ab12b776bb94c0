from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

from models import FoodCategory, ServeTemperature

HOT = ServeTemperature.HOT
WARM = ServeTemperature.WARM
COLD = ServeTemperature.COLD
EITHER = ServeTemperature.HOT_OR_COLD

FOOD_CATEGORIES: Tuple[FoodCategory, ...] = (
    FoodCategory(1, "pizza", "피자", HOT, "치즈와 토핑이 올라간 이탈리아 음식"),
    FoodCategory(2, "chicken", "치킨", HOT, "튀기거나 구운 닭요리"),
    FoodCategory(3, "burger", "버거", WARM, "패티와 야채가 든 햄버거"),
    FoodCategory(4, "chinese", "중식", HOT, "중국식 요리"),
    FoodCategory(5, "korean", "한식", HOT, "한국 전통 요리"),
    FoodCategory(6, "japanese", "일식", EITHER, "일본식 요리"),
    FoodCategory(7, "salad", "샐러드", COLD, "신선한 야채와 드레싱"),
    FoodCategory(8, "stew", "찜/탕", HOT, "뜨거운 국물과 찜 요리"),
    FoodCategory(9, "grilled", "구이", HOT, "고기나 해산물 구이"),
    FoodCategory(10, "western", "양식", WARM, "파스타, 스테이크 등 서양 요리"),
    FoodCategory(11, "sashimi", "회/해물", COLD, "신선한 해산물 요리"),
    FoodCategory(12, "dessert", "디저트", COLD, "달콤한 후식"),
    FoodCategory(13, "cold_noodles", "냉면", COLD, "차가운 육수의 면 요리"),
    FoodCategory(14, "coffee_tea", "커피/차", EITHER, "따뜻하거나 차가운 음료"),
    FoodCategory(15, "ice_cream", "빙수/아이스크림", COLD, "차가운 디저트"),
    FoodCategory(16, "pork_cutlet", "돈까스", HOT, "튀긴 돼지고기 커틀릿"),
    FoodCategory(17, "snack_food", "분식", WARM, "떡볶이, 김밥 등 간편한 음식"),
    FoodCategory(18, "sandwich", "샌드위치", WARM, "빵 사이에 재료를 넣은 요리"),
    FoodCategory(19, "porridge", "죽", WARM, "소화가 잘 되는 부드러운 죽"),
    FoodCategory(20, "mexican", "멕시칸", WARM, "멕시코식 요리"),
    FoodCategory(21, "jokbal_bossam", "족발/보쌈", WARM, "삶은 돼지고기 요리"),
    FoodCategory(22, "lunch_box", "도시락", WARM, "밥과 반찬을 담은 도시락"),
    FoodCategory(23, "asian", "아시안", HOT, "동남아시아 요리"),
    FoodCategory(24, "snacks", "간식", EITHER, "가볍게 먹는 간식"),
)

# Curated synonyms per category, keyed by localized name. The category's own
# localized and base names are added by keywords_for().
_SYNONYMS: Dict[str, List[str]] = {
    "피자": ["도우", "치즈", "토핑", "페퍼로니", "오븐", "피자헛"],
    "치킨": ["닭", "튀김", "양념", "프라이드", "핫윙", "순살", "치밥"],
    "버거": ["burger", "햄버거", "패티", "불고기버거", "치즈버거", "세트"],
    "중식": ["중국", "짜장", "짬뽕", "탕수육", "마라", "볶음밥", "딤섬"],
    "한식": ["김치", "밥", "국", "찌개", "불고기", "된장", "비빔"],
    "일식": ["일본", "초밥", "라멘", "돈부리", "우동", "덮밥", "튀김"],
    "샐러드": ["야채", "드레싱", "채소", "건강식", "그린", "올리브"],
    "찜/탕": ["찜", "탕", "국물", "끓", "매운탕", "아구찜", "갈비찜", "해장", "전골"],
    "구이": ["고기", "바베큐", "석쇠", "숯불", "삼겹살", "불판", "bbq"],
    "양식": ["스테이크", "파스타", "리조또", "그라탱", "오븐", "크림"],
    "회/해물": ["sashimi", "seafood", "회", "해물", "생선", "조개", "초장", "광어", "연어", "물회"],
    "디저트": ["후식", "달콤", "케이크", "초콜릿", "마카롱", "푸딩"],
    "냉면": ["물냉", "비냉", "밀면", "cold noodles"],
    "커피/차": ["coffee", "tea", "커피", "차", "음료", "카페인", "라떼", "아메리카노", "녹차"],
    "빙수/아이스크림": ["빙수", "아이스크림", "ice cream", "팥빙수", "젤라또"],
    "돈까스": ["cutlet", "까스", "등심", "안심", "소스", "튀김", "정식"],
    "분식": ["snack", "떡볶이", "순대", "튀김", "김밥", "라면", "오뎅", "분식집"],
    "샌드위치": ["햄", "치즈", "베이컨", "토스트", "샐러드"],
    "죽": ["미음", "전복죽", "야채죽", "단호박죽", "소화", "건강식"],
    "멕시칸": ["타코", "브리또", "살사", "퀘사디아", "나쵸"],
    "족발/보쌈": ["족발", "보쌈", "수육", "쌈", "마늘", "새우젓", "보쌈김치", "무말랭이"],
    "도시락": ["lunch box", "박스", "반찬", "정식", "김밥", "계란말이"],
    "아시안": ["동남아", "베트남", "태국", "쌀국수", "나시고랭", "팟타이"],
    "간식": ["과자", "쿠키", "비스킷", "젤리", "초코", "핫도그"],
}


def keywords_for(category: FoodCategory) -> FrozenSet[str]:
    return frozenset([category.name_ko, category.name, *_SYNONYMS.get(category.name_ko, [])])


CATEGORY_KEYWORDS: Dict[str, FrozenSet[str]] = {c.name_ko: keywords_for(c) for c in FOOD_CATEGORIES}

# Portion classes by localized name.
HEARTY_FOODS: FrozenSet[str] = frozenset({"한식", "찜/탕", "구이", "중식", "돈까스", "치킨", "버거"})
MODERATE_FOODS: FrozenSet[str] = frozenset({"피자", "양식", "일식", "분식", "샌드위치", "도시락", "아시안"})
LIGHT_FOODS: FrozenSet[str] = frozenset({"샐러드", "디저트", "커피/차", "간식", "죽"})


def get_category_by_id(category_id: int) -> Optional[FoodCategory]:
    for category in FOOD_CATEGORIES:
        if category.id == category_id:
            return category
    return None


def get_category_by_name(name: str) -> Optional[FoodCategory]:
    """Look up by base name ("pizza") or localized name ("피자")."""
    needle = (name or "").strip().lower()
    for category in FOOD_CATEGORIES:
        if category.name == needle or category.name_ko == needle:
            return category
    return None


def get_categories_by_serve_temp(serve_temp: ServeTemperature) -> List[FoodCategory]:
    return [c for c in FOOD_CATEGORIES if c.serve_temp == serve_temp]
