"""UI strings for the server-rendered pages, in English and Chinese."""

SUPPORTED_CULTURES = ("en", "zh")
DEFAULT_CULTURE = "en"

UI_STRINGS: dict[str, dict[str, str]] = {
    "en": {
        "RecipeBook": "Recipe Book",
        "Home": "Home",
        "Recipes": "Recipes",
        "WelcomeTitle": "Welcome to Recipe Book",
        "WelcomeDescription": (
            "Discover, save, and share delicious recipes. From quick weeknight dinners "
            "to impressive party dishes, find your next culinary adventure here."
        ),
        "BrowseRecipes": "Browse Recipes",
        "AddRecipe": "Add Recipe",
        "RecentlyAdded": "Recently Added",
        "RecipeCollection": "Recipe Collection",
        "DiscoverRecipes": "Discover delicious recipes for every occasion",
        "AddNewRecipe": "Add New Recipe",
        "Search": "Search",
        "SearchPlaceholder": "Search by title or description...",
        "Category": "Category",
        "AllCategories": "All Categories",
        "Filter": "Filter",
        "PrintSelected": "Print Selected",
        "PrintAll": "Print All",
        "View": "View",
        "Edit": "Edit",
        "Delete": "Delete",
        "NoRecipesFound": "No recipes found.",
        "AddFirstRecipe": "Add the first recipe!",
        "ViewRecipe": "View Recipe",
        "Minutes": "Minutes",
        "Servings": "Servings",
        "PrepTime": "Prep Time",
        "CookTime": "Cook Time",
        "TotalTime": "Total Time",
        "Ingredients": "Ingredients",
        "Instructions": "Instructions",
        "Print": "Print",
        "BackToRecipes": "Back to Recipes",
        "RecipeNotFound": "Recipe not found.",
        "VerifiedRecipe": "Verified Recipe",
        "CreateRecipe": "Create Recipe",
        "EditRecipe": "Edit Recipe",
        "Title": "Title",
        "Description": "Description",
        "Cancel": "Cancel",
        "Save": "Save",
        "SaveChanges": "Save Changes",
        "UploadImage": "Upload Image",
        "UploadNewImage": "Upload New Image",
        "AllowedFormats": "Allowed formats",
        "MaxSize": "Max size",
        "DeleteRecipe": "Delete Recipe",
        "ConfirmDelete": "Are you sure you want to delete this recipe?",
        "ThisActionCannotBeUndone": "This action cannot be undone.",
        "Verify": "Mark as Verified",
        "min": "min",
        "servings": "servings",
    },
    "zh": {
        "RecipeBook": "食谱本",
        "Home": "首页",
        "Recipes": "食谱",
        "WelcomeTitle": "欢迎来到食谱本",
        "WelcomeDescription": "发现、保存和分享美味食谱。从快速的工作日晚餐到令人印象深刻的派对菜肴，在这里找到您的下一次烹饪冒险。",
        "BrowseRecipes": "浏览食谱",
        "AddRecipe": "添加食谱",
        "RecentlyAdded": "最近添加",
        "RecipeCollection": "食谱收藏",
        "DiscoverRecipes": "发现适合各种场合的美味食谱",
        "AddNewRecipe": "添加新食谱",
        "Search": "搜索",
        "SearchPlaceholder": "按标题或描述搜索...",
        "Category": "类别",
        "AllCategories": "所有类别",
        "Filter": "筛选",
        "PrintSelected": "打印所选",
        "PrintAll": "打印全部",
        "View": "查看",
        "Edit": "编辑",
        "Delete": "删除",
        "NoRecipesFound": "未找到食谱。",
        "AddFirstRecipe": "添加第一个食谱！",
        "ViewRecipe": "查看食谱",
        "Minutes": "分钟",
        "Servings": "份",
        "PrepTime": "准备时间",
        "CookTime": "烹饪时间",
        "TotalTime": "总时间",
        "Ingredients": "食材",
        "Instructions": "步骤",
        "Print": "打印",
        "BackToRecipes": "返回食谱",
        "RecipeNotFound": "未找到食谱。",
        "VerifiedRecipe": "已验证食谱",
        "CreateRecipe": "创建食谱",
        "EditRecipe": "编辑食谱",
        "Title": "标题",
        "Description": "描述",
        "Cancel": "取消",
        "Save": "保存",
        "SaveChanges": "保存更改",
        "UploadImage": "上传图片",
        "UploadNewImage": "上传新图片",
        "AllowedFormats": "允许格式",
        "MaxSize": "最大大小",
        "DeleteRecipe": "删除食谱",
        "ConfirmDelete": "确定要删除此食谱吗？",
        "ThisActionCannotBeUndone": "此操作无法撤销。",
        "Verify": "标记为已验证",
        "min": "分钟",
        "servings": "份",
    },
}


def translate_ui(key: str, culture: str = DEFAULT_CULTURE) -> str:
    """Look up a UI string; unknown keys come back unchanged."""
    strings = UI_STRINGS.get(culture) or UI_STRINGS[DEFAULT_CULTURE]
    return strings.get(key, key)
