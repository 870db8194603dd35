from django.urls import path
from . import views

app_name = 'shop'

urlpatterns = [
    # GET  /api/shop/                       - Items on sale + my balance
    # POST /api/shop/buy/                   - Buy an item
    # GET  /api/shop/purchases/             - My purchases
    # GET  /api/shop/items/                 - All items (operator)
    # POST /api/shop/items/                 - Create item (operator)
    # POST /api/shop/items/{id}/toggle/     - Activate/deactivate item (operator)
    path('', views.shop_overview, name='overview'),
    path('buy/', views.buy, name='buy'),
    path('purchases/', views.purchases, name='purchases'),
    path('items/', views.items, name='items'),
    path('items/<uuid:item_id>/toggle/', views.toggle, name='item-toggle'),
]
