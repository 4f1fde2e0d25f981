"""Static spoken-keyword map (English and Hinglish) to storefront routes."""

COMMAND_MAP = {
    # home
    'home': '/', 'ghar': '/', 'main': '/', 'start': '/',
    # catalog
    'products': '/products', 'house plan': '/products', 'designs': '/products', 'saman': '/products',
    'shop': '/products', 'all plans': '/products',
    'floor plans': '/floor-plans', 'floor plan': '/floor-plans', 'naksha': '/floor-plans',
    'nasha': '/floor-plans', 'map': '/floor-plans',
    '3d plans': '/3d-plans', '3d plan': '/3d-plans', '3d design': '/3d-plans', 'three d': '/3d-plans',
    '3 d': '/3d-plans',
    'interior designs': '/interior-designs', 'interior': '/interior-designs',
    'interior design': '/interior-designs', 'sajawat': '/interior-designs',
    'decoration': '/interior-designs', 'furniture': '/interior-designs',
    'download': '/download', 'files': '/download', 'document': '/download', 'kaam ki file': '/download',
    # services and partners
    'services': '/services', 'sewa': '/services', 'kam': '/services', 'service': '/services',
    'city partner': '/city-partners', 'partner': '/city-partners', 'city': '/city-partners',
    'career': '/careers', 'job': '/careers', 'naukri': '/careers', 'kaam': '/careers',
    'package': '/packages', 'packages': '/packages', 'offer': '/packages', 'special': '/packages',
    'plans': '/packages',
    'gallery': '/gallery', 'photo': '/gallery', 'tasveer': '/gallery', 'images': '/gallery',
    'photu': '/gallery',
    'marketplace': '/marketplace', 'bazaar': '/marketplace', 'market': '/marketplace',
    'contact': '/contact', 'support': '/contact', 'help': '/contact', 'madad': '/contact',
    'sarkaar': '/contact',
    'cart': '/cart', 'tokri': '/cart', 'bag': '/cart', 'shopping bag': '/cart',
    'about': '/about', 'hamaare baare mein': '/about', 'info': '/about',
    # account
    'login': '/login', 'sign in': '/login', 'entry': '/login',
    'register': '/register', 'sign up': '/register', 'registration': '/register',
    'naya account': '/register',
    'dashboard': '/dashboard', 'my account': '/dashboard', 'profile': '/dashboard/account-details',
    'setting': '/dashboard/account-details', 'my orders': '/dashboard/orders',
    'orders': '/dashboard/orders', 'my booking': '/dashboard/orders',
    'downloads': '/dashboard/downloads', 'download files': '/dashboard/downloads',
    'address': '/dashboard/addresses', 'addresses': '/dashboard/addresses',
    # seller and professional areas
    'seller': '/seller', 'seller dashboard': '/seller', 'seller product': '/seller/products',
    'my products': '/seller/products', 'add product': '/seller/products/add',
    'naya product': '/seller/products/add',
    'professional': '/professional', 'pro dashboard': '/professional',
    'my plan': '/professional/my-products',
    # admin
    'admin': '/admin', 'admin dashboard': '/admin', 'admin panel': '/admin', 'sarkari': '/admin',
    'admin products': '/admin/products', 'all users': '/admin/users', 'add user': '/admin/users/add',
    'admin orders': '/admin/orders', 'customers': '/admin/customers', 'reports': '/admin/reports',
    'admin settings': '/admin/settings', 'admin gallery': '/admin/gallery', 'admin media': '/admin/media',
    'seller enquiries': '/admin/seller-enquiries', 'admin packages': '/admin/packages',
    'standard requests': '/admin/standard-requests', 'premium requests': '/admin/premium-requests',
    'customization requests': '/admin/customization-requests', 'admin blogs': '/admin/blogs',
    'admin videos': '/admin/addvideos', 'seller products': '/admin/seller-products',
    'manage seller plans': '/admin/managesellerplans',
}

# Longest phrases first so "floor plans" wins over "plans". Stable sort keeps
# map order among equal lengths.
SORTED_COMMANDS = sorted(COMMAND_MAP, key=len, reverse=True)

FILLER_WORDS = ('go to ', 'open ', 'show me ', 'please ', 'scroll to ', 'fill ', 'my ')
FOOTER_WORDS = ('footer', 'bottom')
REGISTER_FLOW_PHRASES = ('register a user', 'register user')
