from django.urls import path
from . import views

urlpatterns = [
    path('', views.inventory, name='inventory'),  # dealer home
    path('login/', views.PortalLoginView.as_view(), name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('cart/', views.cart_view, name='cart'),
    path('checkout/', views.checkout, name='checkout'),
    path('orders/', views.my_orders, name='my_orders'),
    path('account/', views.account, name='account'),
    path('warehouse/orders/', views.warehouse_orders, name='warehouse_orders'),
    path('warehouse/orders/<int:order_id>/', views.warehouse_order_detail, name='warehouse_order_detail'),

    # JSON endpoints
    path('ajax/search-products/', views.ajax_search_products, name='ajax_search_products'),
    path('ajax/add-to-cart/', views.ajax_add_to_cart, name='ajax_add_to_cart'),
    path('ajax/update-cart-item/', views.ajax_update_cart_item, name='ajax_update_cart_item'),
    path('ajax/remove-from-cart/', views.ajax_remove_from_cart, name='ajax_remove_from_cart'),
    path('ajax/place-order/', views.ajax_place_order, name='ajax_place_order'),
    path('ajax/orders/', views.ajax_get_orders, name='ajax_get_orders'),
    path('ajax/cancel-order/', views.ajax_cancel_order, name='ajax_cancel_order'),
    path('ajax/account/', views.ajax_get_account, name='ajax_get_account'),
    path('ajax/account/update/', views.ajax_update_account, name='ajax_update_account'),
    path('ajax/warehouse/orders/', views.ajax_warehouse_orders, name='ajax_warehouse_orders'),
    path('ajax/warehouse/order-detail/', views.ajax_warehouse_order_detail, name='ajax_warehouse_order_detail'),
    path('ajax/warehouse/update-status/', views.ajax_warehouse_update_status, name='ajax_warehouse_update_status'),
]
