"""Display text for suggestion keys, factor notes and errors."""

from meal_coach.domain.errors import ErrorType
from meal_coach.domain.models import Language, MealContext, require_exhaustive
from meal_coach.domain.rating import FactorNote, Suggestion, SuggestionKey

MEAL_NAMES: dict[Language, dict[MealContext, str]] = {
    Language.EN: {
        MealContext.BREAKFAST: "breakfast",
        MealContext.LUNCH: "lunch",
        MealContext.DINNER: "dinner",
        MealContext.SNACK: "snack",
    },
    Language.ZH_CN: {
        MealContext.BREAKFAST: "早餐",
        MealContext.LUNCH: "午餐",
        MealContext.DINNER: "晚餐",
        MealContext.SNACK: "加餐",
    },
    Language.ZH_TW: {
        MealContext.BREAKFAST: "早餐",
        MealContext.LUNCH: "午餐",
        MealContext.DINNER: "晚餐",
        MealContext.SNACK: "點心",
    },
}

FACTOR_MESSAGES: dict[Language, dict[FactorNote, str]] = {
    Language.EN: {
        FactorNote.CALORIES_APPROPRIATE: "Calorie content is appropriate for {meal} ({kcal} kcal)",
        FactorNote.CALORIES_SLIGHTLY_HIGH: "Slightly high in calories for {meal} ({kcal} kcal)",
        FactorNote.CALORIES_SLIGHTLY_LOW: "Slightly low in calories for {meal} ({kcal} kcal)",
        FactorNote.CALORIES_TOO_HIGH: "Too high in calories for {meal} ({kcal} kcal)",
        FactorNote.CALORIES_TOO_LOW: "Too low in calories for {meal} ({kcal} kcal)",
        FactorNote.SODIUM_LOW: "Low sodium content ({mg}mg)",
        FactorNote.SODIUM_MODERATE: "Moderate sodium content ({mg}mg)",
        FactorNote.SODIUM_HIGH: "High sodium content ({mg}mg) - consider reducing",
        FactorNote.SODIUM_VERY_HIGH: "Very high sodium content ({mg}mg) - exceeds recommended limit",
        FactorNote.FAT_HEALTHY: "Healthy fat content ({grams}g, {percent}% of calories)",
        FactorNote.FAT_MODERATE: "Moderate fat content ({grams}g, {percent}% of calories)",
        FactorNote.FAT_HIGH: "High fat content ({grams}g, {percent}% of calories)",
        FactorNote.BALANCE_GOOD: "Well-balanced meal (P:{protein}% C:{carbs}% F:{fat}%)",
        FactorNote.BALANCE_MODERATE: "Moderately balanced (P:{protein}% C:{carbs}% F:{fat}%)",
        FactorNote.BALANCE_POOR: "Unbalanced meal (P:{protein}% C:{carbs}% F:{fat}%)",
        FactorNote.NUTRI_GRADE_UNKNOWN: "N/A",
        FactorNote.NUTRI_GRADE_OK: "Nutri-Grade: {grade}",
        FactorNote.NUTRI_GRADE_HIGH_SUGAR: "Nutri-Grade: {grade} - High in sugar/saturated fat",
        FactorNote.NUTRI_GRADE_VERY_HIGH_SUGAR: "Nutri-Grade: {grade} - Very high in sugar/saturated fat",
        FactorNote.GI_UNKNOWN: "N/A",
        FactorNote.GI_HEALTHY: "Healthy GI level",
        FactorNote.GI_HIGH: "High Glycemic Index - may cause blood sugar spikes",
    },
    Language.ZH_CN: {
        FactorNote.CALORIES_APPROPRIATE: "热量适合{meal}（{kcal} 千卡）",
        FactorNote.CALORIES_SLIGHTLY_HIGH: "作为{meal}热量略高（{kcal} 千卡）",
        FactorNote.CALORIES_SLIGHTLY_LOW: "作为{meal}热量略低（{kcal} 千卡）",
        FactorNote.CALORIES_TOO_HIGH: "作为{meal}热量过高（{kcal} 千卡）",
        FactorNote.CALORIES_TOO_LOW: "作为{meal}热量过低（{kcal} 千卡）",
        FactorNote.SODIUM_LOW: "钠含量低（{mg}毫克）",
        FactorNote.SODIUM_MODERATE: "钠含量适中（{mg}毫克）",
        FactorNote.SODIUM_HIGH: "钠含量偏高（{mg}毫克）- 建议减少",
        FactorNote.SODIUM_VERY_HIGH: "钠含量很高（{mg}毫克）- 超过建议上限",
        FactorNote.FAT_HEALTHY: "脂肪含量健康（{grams}克，占热量 {percent}%）",
        FactorNote.FAT_MODERATE: "脂肪含量适中（{grams}克，占热量 {percent}%）",
        FactorNote.FAT_HIGH: "脂肪含量高（{grams}克，占热量 {percent}%）",
        FactorNote.BALANCE_GOOD: "营养均衡（蛋白质:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.BALANCE_MODERATE: "营养较均衡（蛋白质:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.BALANCE_POOR: "营养不均衡（蛋白质:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.NUTRI_GRADE_UNKNOWN: "不适用",
        FactorNote.NUTRI_GRADE_OK: "营养等级：{grade}",
        FactorNote.NUTRI_GRADE_HIGH_SUGAR: "营养等级：{grade} - 糖/饱和脂肪偏高",
        FactorNote.NUTRI_GRADE_VERY_HIGH_SUGAR: "营养等级：{grade} - 糖/饱和脂肪很高",
        FactorNote.GI_UNKNOWN: "不适用",
        FactorNote.GI_HEALTHY: "升糖指数健康",
        FactorNote.GI_HIGH: "高升糖指数 - 可能导致血糖飙升",
    },
    Language.ZH_TW: {
        FactorNote.CALORIES_APPROPRIATE: "熱量適合{meal}（{kcal} 大卡）",
        FactorNote.CALORIES_SLIGHTLY_HIGH: "作為{meal}熱量略高（{kcal} 大卡）",
        FactorNote.CALORIES_SLIGHTLY_LOW: "作為{meal}熱量略低（{kcal} 大卡）",
        FactorNote.CALORIES_TOO_HIGH: "作為{meal}熱量過高（{kcal} 大卡）",
        FactorNote.CALORIES_TOO_LOW: "作為{meal}熱量過低（{kcal} 大卡）",
        FactorNote.SODIUM_LOW: "鈉含量低（{mg}毫克）",
        FactorNote.SODIUM_MODERATE: "鈉含量適中（{mg}毫克）",
        FactorNote.SODIUM_HIGH: "鈉含量偏高（{mg}毫克）- 建議減少",
        FactorNote.SODIUM_VERY_HIGH: "鈉含量很高（{mg}毫克）- 超過建議上限",
        FactorNote.FAT_HEALTHY: "脂肪含量健康（{grams}克，佔熱量 {percent}%）",
        FactorNote.FAT_MODERATE: "脂肪含量適中（{grams}克，佔熱量 {percent}%）",
        FactorNote.FAT_HIGH: "脂肪含量高（{grams}克，佔熱量 {percent}%）",
        FactorNote.BALANCE_GOOD: "營養均衡（蛋白質:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.BALANCE_MODERATE: "營養較均衡（蛋白質:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.BALANCE_POOR: "營養不均衡（蛋白質:{protein}% 碳水:{carbs}% 脂肪:{fat}%）",
        FactorNote.NUTRI_GRADE_UNKNOWN: "不適用",
        FactorNote.NUTRI_GRADE_OK: "營養等級：{grade}",
        FactorNote.NUTRI_GRADE_HIGH_SUGAR: "營養等級：{grade} - 糖/飽和脂肪偏高",
        FactorNote.NUTRI_GRADE_VERY_HIGH_SUGAR: "營養等級：{grade} - 糖/飽和脂肪很高",
        FactorNote.GI_UNKNOWN: "不適用",
        FactorNote.GI_HEALTHY: "升糖指數健康",
        FactorNote.GI_HIGH: "高升糖指數 - 可能導致血糖飆升",
    },
}

SUGGESTIONS: dict[Language, dict[SuggestionKey, str]] = {
    Language.EN: {
        SuggestionKey.SMALLER_PORTIONS: "Consider smaller portions to support your weight loss goal",
        SuggestionKey.BALANCE_WITH_LIGHTER_MEALS: "This meal is calorie-dense - balance with lighter meals today",
        SuggestionKey.ADD_PROTEIN_FOR_MUSCLE: "Add protein-rich foods to support muscle growth",
        SuggestionKey.REDUCE_SALTY_CONDIMENTS: "Reduce soy sauce, soup, and salty condiments",
        SuggestionKey.DRINK_WATER: "Drink plenty of water to help flush excess sodium",
        SuggestionKey.WATCH_SODIUM: "Watch sodium intake for the rest of the day",
        SuggestionKey.REMOVE_VISIBLE_FAT: "Remove visible fat and chicken skin",
        SuggestionKey.CHOOSE_STEAMED_OR_GRILLED: "Choose steamed or grilled options instead of fried",
        SuggestionKey.BALANCE_WITH_LOWER_FAT: "Balance with lower-fat meals later today",
        SuggestionKey.ADD_PROTEIN_FOR_BALANCE: "Add more protein (lean meat, tofu, eggs) for better balance",
        SuggestionKey.REDUCE_REFINED_CARBS: "Reduce rice/noodles and add more vegetables",
        SuggestionKey.SWAP_FOR_LOWER_GI: "Tip: Swap white rice/noodles for whole grains or add more vegetables to lower GI",
        SuggestionKey.LESS_SUGAR: 'Tip: Choose "Siu Dai" (less sugar) or water to improve Nutri-Grade',
        SuggestionKey.HAWKER_LESS_GRAVY: "Hawker Tip: Ask for less gravy and more bean sprouts",
        SuggestionKey.ITEM_IMPROVEMENT_TIP: "Tip for {item}: {tip}",
        SuggestionKey.EAT_SLOWLY: "Tip: Eat slowly and stop when 80% full",
        SuggestionKey.PROTEIN_THROUGHOUT_DAY: "Tip: Ensure adequate protein intake throughout the day",
        SuggestionKey.WHOLE_GRAINS: "Tip: Choose whole grains and avoid sugary drinks",
    },
    Language.ZH_CN: {
        SuggestionKey.SMALLER_PORTIONS: "建议减少份量，帮助实现减重目标",
        SuggestionKey.BALANCE_WITH_LIGHTER_MEALS: "这餐热量较高，今天其他餐尽量清淡",
        SuggestionKey.ADD_PROTEIN_FOR_MUSCLE: "增加富含蛋白质的食物，帮助增肌",
        SuggestionKey.REDUCE_SALTY_CONDIMENTS: "少吃酱油、汤和咸味调料",
        SuggestionKey.DRINK_WATER: "多喝水，帮助排出多余的钠",
        SuggestionKey.WATCH_SODIUM: "今天剩下的时间注意控制钠摄入",
        SuggestionKey.REMOVE_VISIBLE_FAT: "去掉可见的肥肉和鸡皮",
        SuggestionKey.CHOOSE_STEAMED_OR_GRILLED: "选择蒸或烤的做法，避免油炸",
        SuggestionKey.BALANCE_WITH_LOWER_FAT: "今天晚些时候选择低脂餐来平衡",
        SuggestionKey.ADD_PROTEIN_FOR_BALANCE: "增加蛋白质（瘦肉、豆腐、鸡蛋）使营养更均衡",
        SuggestionKey.REDUCE_REFINED_CARBS: "少吃米饭/面条，多吃蔬菜",
        SuggestionKey.SWAP_FOR_LOWER_GI: "小贴士：把白米饭/面条换成全谷物或多加蔬菜，降低升糖指数",
        SuggestionKey.LESS_SUGAR: "小贴士：选择“少甜”(Siu Dai) 或白开水，改善营养等级",
        SuggestionKey.HAWKER_LESS_GRAVY: "小贩中心小贴士：少要酱汁，多加豆芽",
        SuggestionKey.ITEM_IMPROVEMENT_TIP: "{item}小贴士：{tip}",
        SuggestionKey.EAT_SLOWLY: "小贴士：细嚼慢咽，吃到八分饱",
        SuggestionKey.PROTEIN_THROUGHOUT_DAY: "小贴士：全天保证充足的蛋白质摄入",
        SuggestionKey.WHOLE_GRAINS: "小贴士：选择全谷物，避免含糖饮料",
    },
    Language.ZH_TW: {
        SuggestionKey.SMALLER_PORTIONS: "建議減少份量，幫助實現減重目標",
        SuggestionKey.BALANCE_WITH_LIGHTER_MEALS: "這餐熱量較高，今天其他餐盡量清淡",
        SuggestionKey.ADD_PROTEIN_FOR_MUSCLE: "增加富含蛋白質的食物，幫助增肌",
        SuggestionKey.REDUCE_SALTY_CONDIMENTS: "少吃醬油、湯和鹹味調料",
        SuggestionKey.DRINK_WATER: "多喝水，幫助排出多餘的鈉",
        SuggestionKey.WATCH_SODIUM: "今天剩下的時間注意控制鈉攝取",
        SuggestionKey.REMOVE_VISIBLE_FAT: "去掉可見的肥肉和雞皮",
        SuggestionKey.CHOOSE_STEAMED_OR_GRILLED: "選擇蒸或烤的做法，避免油炸",
        SuggestionKey.BALANCE_WITH_LOWER_FAT: "今天晚些時候選擇低脂餐來平衡",
        SuggestionKey.ADD_PROTEIN_FOR_BALANCE: "增加蛋白質（瘦肉、豆腐、雞蛋）使營養更均衡",
        SuggestionKey.REDUCE_REFINED_CARBS: "少吃米飯/麵條，多吃蔬菜",
        SuggestionKey.SWAP_FOR_LOWER_GI: "小提示：把白米飯/麵條換成全穀物或多加蔬菜，降低升糖指數",
        SuggestionKey.LESS_SUGAR: "小提示：選擇「少甜」(Siu Dai) 或白開水，改善營養等級",
        SuggestionKey.HAWKER_LESS_GRAVY: "小販中心小提示：少要醬汁，多加豆芽",
        SuggestionKey.ITEM_IMPROVEMENT_TIP: "{item}小提示：{tip}",
        SuggestionKey.EAT_SLOWLY: "小提示：細嚼慢嚥，吃到八分飽",
        SuggestionKey.PROTEIN_THROUGHOUT_DAY: "小提示：全天保證充足的蛋白質攝取",
        SuggestionKey.WHOLE_GRAINS: "小提示：選擇全穀物，避免含糖飲料",
    },
}

ERROR_MESSAGES: dict[Language, dict[ErrorType, tuple[str, str]]] = {
    Language.EN: {
        ErrorType.UNSUPPORTED_FORMAT: (
            "Invalid image format. Please send a clear photo of your food.",
            "Try taking a new photo with better lighting and focus.",
        ),
        ErrorType.NO_FOOD_DETECTED: (
            "No food items detected in the image.",
            "Please retake the photo with the whole plate in view.",
        ),
        ErrorType.INCOMPLETE_FOOD_INFORMATION: (
            "Incomplete food information.",
            "Please try taking another photo.",
        ),
        ErrorType.INVALID_NUTRITION_RANGE: (
            "Could not estimate the nutrition of this meal.",
            "Please try taking another photo.",
        ),
        ErrorType.TIMEOUT: (
            "Recognition is taking longer than expected. Please try again.",
            "Try taking a clearer photo or check your internet connection.",
        ),
        ErrorType.AI_API_ERROR: (
            "Failed to recognize food.",
            "Please try taking another photo with better lighting.",
        ),
        ErrorType.DOWNLOAD_FAILED: (
            "Could not download the photo.",
            "Please check the link or send the photo again.",
        ),
    },
    Language.ZH_CN: {
        ErrorType.UNSUPPORTED_FORMAT: (
            "图片格式无效，请发送清晰的食物照片。",
            "请在更好的光线下重新对焦拍照。",
        ),
        ErrorType.NO_FOOD_DETECTED: (
            "图片中未识别到食物。",
            "请重新拍摄，确保整盘食物都在画面中。",
        ),
        ErrorType.INCOMPLETE_FOOD_INFORMATION: (
            "食物信息不完整。",
            "请尝试重新拍照。",
        ),
        ErrorType.INVALID_NUTRITION_RANGE: (
            "无法估算这餐的营养。",
            "请尝试重新拍照。",
        ),
        ErrorType.TIMEOUT: (
            "识别超时，请稍后重试。",
            "请尝试拍摄更清晰的照片或检查网络连接。",
        ),
        ErrorType.AI_API_ERROR: (
            "识别失败。",
            "请尝试在更好的光线下重新拍照。",
        ),
        ErrorType.DOWNLOAD_FAILED: (
            "图片下载失败。",
            "请检查链接或重新发送照片。",
        ),
    },
    Language.ZH_TW: {
        ErrorType.UNSUPPORTED_FORMAT: (
            "圖片格式無效，請傳送清晰的食物照片。",
            "請在更好的光線下重新對焦拍照。",
        ),
        ErrorType.NO_FOOD_DETECTED: (
            "圖片中未識別到食物。",
            "請重新拍攝，確保整盤食物都在畫面中。",
        ),
        ErrorType.INCOMPLETE_FOOD_INFORMATION: (
            "食物資訊不完整。",
            "請嘗試重新拍照。",
        ),
        ErrorType.INVALID_NUTRITION_RANGE: (
            "無法估算這餐的營養。",
            "請嘗試重新拍照。",
        ),
        ErrorType.TIMEOUT: (
            "識別逾時，請稍後重試。",
            "請嘗試拍攝更清晰的照片或檢查網路連線。",
        ),
        ErrorType.AI_API_ERROR: (
            "識別失敗。",
            "請嘗試在更好的光線下重新拍照。",
        ),
        ErrorType.DOWNLOAD_FAILED: (
            "圖片下載失敗。",
            "請檢查連結或重新傳送照片。",
        ),
    },
}

RATE_LIMITED: dict[Language, tuple[str, str]] = {
    Language.EN: ("Service is temporarily busy", "Please wait a moment and try again."),
    Language.ZH_CN: ("服务暂时繁忙", "请稍后再试。"),
    Language.ZH_TW: ("服務暫時繁忙", "請稍後再試。"),
}

for _language in Language:
    require_exhaustive(MEAL_NAMES[_language], MealContext, f"MEAL_NAMES[{_language}]")
    require_exhaustive(FACTOR_MESSAGES[_language], FactorNote, f"FACTOR_MESSAGES[{_language}]")
    require_exhaustive(SUGGESTIONS[_language], SuggestionKey, f"SUGGESTIONS[{_language}]")
    require_exhaustive(ERROR_MESSAGES[_language], ErrorType, f"ERROR_MESSAGES[{_language}]")


def meal_name(context: MealContext, language: Language) -> str:
    return MEAL_NAMES[language][context]


def factor_message(note: FactorNote, language: Language, **values: object) -> str:
    """Render a factor note in the given language."""
    return FACTOR_MESSAGES[language][note].format(**values)


def render_suggestion(suggestion: Suggestion, language: Language) -> str:
    """Render a suggestion key in the given language."""
    template = SUGGESTIONS[language][suggestion.key]
    return template.format(item=suggestion.item or "", tip=suggestion.tip or "")


def error_text(error_type: ErrorType, language: Language) -> tuple[str, str]:
    """Return the message and follow-up suggestion for a failure."""
    return ERROR_MESSAGES[language][error_type]
